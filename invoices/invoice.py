from invoices.line_item import LineItem
from src.money import to_decimal, ZERO

STATUS_UNPAID = "Unpaid"
STATUS_PARTIAL = "Partial"
STATUS_PAID = "Paid"
STATUS_CANCELLED = "Cancelled"
INVOICE_STATUSES = (STATUS_UNPAID, STATUS_PARTIAL, STATUS_PAID, STATUS_CANCELLED)

AMOUNT_FIELDS = ("subtotal", "gst_amount", "cgst", "sgst", "shipping", "round_off", "grand_total", "paid", "balance")


def balance_due(grand_total, paid):
    return to_decimal(grand_total) - to_decimal(paid)


def payment_status(grand_total, paid):
    """Paid once nothing is owed, Partial after any payment, otherwise Unpaid."""
    paid = to_decimal(paid)
    if balance_due(grand_total, paid) <= ZERO:
        return STATUS_PAID
    if paid > ZERO:
        return STATUS_PARTIAL
    return STATUS_UNPAID


class Invoice:
    def __init__(self, id=None, invoice_no="", date="", customer_id=None, customer_name="",
                 customer_mobile="", customer_address="", customer_gst="", items=None,
                 payment_mode="Cash", status=STATUS_UNPAID, draft_id=None, **amounts):
        self.id = id
        self.invoice_no = invoice_no
        # ISO date, compared as a string in reports
        self.date = date

        # Customer snapshot taken at settlement
        self.customer_id = customer_id
        self.customer_name = customer_name or ""
        self.customer_mobile = customer_mobile or ""
        self.customer_address = customer_address or ""
        self.customer_gst = customer_gst or ""

        self.items = list(items or [])

        for field in AMOUNT_FIELDS:
            setattr(self, field, to_decimal(amounts.get(field)))

        self.payment_mode = payment_mode
        self.status = status
        self.draft_id = draft_id

    @property
    def is_cancelled(self):
        return self.status == STATUS_CANCELLED

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data.get("id"),
            invoice_no=data.get("invoice_no"),
            date=data.get("date"),
            customer_id=data.get("customer_id"),
            customer_name=data.get("customer_name"),
            customer_mobile=data.get("customer_mobile"),
            customer_address=data.get("customer_address"),
            customer_gst=data.get("customer_gst"),
            items=[LineItem.from_dict(i) for i in data.get("items") or []],
            payment_mode=data.get("payment_mode"),
            status=data.get("status"),
            draft_id=data.get("draft_id"),
            **{field: data.get(field) for field in AMOUNT_FIELDS},
        )

    def to_dict(self):
        data = {
            "id": self.id,
            "invoice_no": self.invoice_no,
            "date": self.date,
            "customer_id": self.customer_id,
            "customer_name": self.customer_name,
            "customer_mobile": self.customer_mobile,
            "customer_address": self.customer_address,
            "customer_gst": self.customer_gst,
            "items": [item.to_dict() for item in self.items],
        }
        for field in AMOUNT_FIELDS:
            data[field] = str(getattr(self, field))
        data.update({
            "payment_mode": self.payment_mode,
            "status": self.status,
            "draft_id": self.draft_id,
        })
        return data

    def __repr__(self):
        return f"<Invoice {self.invoice_no} {self.status}>"
