import uuid

from customers.customer import Customer
from invoices.calculator import PricingOptions, calculate_totals
from invoices.invoice import balance_due, payment_status
from invoices.line_item import LineItem
from src.exceptions import ValidationError, NotFoundError
from src.money import to_decimal, to_int, ZERO

class InvoiceDraft:
    """
    Invoice being built before settlement. Holds no store identity.

    Lines are keyed by product id; adding a product that is already on the
    draft bumps its quantity by one. Dict order is the order products were
    first added, which is the order they print in.
    """

    EDITABLE_FIELDS = ("qty", "rate", "discount")

    def __init__(self, customer=None, shipping=0, paid=0, payment_mode="Cash", options=None, draft_id=None):
        # Idempotency key for settlement retries
        self.draft_id = draft_id or uuid.uuid4().hex
        self.customer = customer or Customer()
        self.options = options or PricingOptions()
        self.payment_mode = payment_mode
        self.shipping = shipping
        self.paid = paid
        self._lines = {}

    @classmethod
    def from_settings(cls, settings, **kwargs):
        kwargs.setdefault("payment_mode", settings.default_payment_mode)
        kwargs.setdefault("options", settings.pricing_options())
        return cls(**kwargs)

    # -------------------- header fields --------------------
    @property
    def shipping(self):
        return self._shipping

    @shipping.setter
    def shipping(self, value):
        self._shipping = to_decimal(value)

    @property
    def paid(self):
        return self._paid

    @paid.setter
    def paid(self, value):
        self._paid = to_decimal(value)

    def set_customer(self, customer):
        if isinstance(customer, dict):
            customer = Customer.from_dict(customer)
        self.customer = customer or Customer()

    # -------------------- lines --------------------
    @property
    def items(self):
        return list(self._lines.values())

    def __len__(self):
        return len(self._lines)

    def __contains__(self, product_id):
        return product_id in self._lines

    @property
    def is_empty(self):
        return not self._lines

    def get_item(self, product_id):
        try:
            return self._lines[product_id]
        except KeyError:
            raise NotFoundError(f"Product id {product_id} is not on this invoice")

    def add_item(self, product):
        line = self._lines.get(product.id)
        if line:
            line.qty += 1
            return line
        line = LineItem.from_product(product)
        self._lines[product.id] = line
        return line

    def update_item(self, product_id, field, value):
        if field not in self.EDITABLE_FIELDS:
            raise ValidationError(f"Field '{field}' cannot be edited; use one of {', '.join(self.EDITABLE_FIELDS)}")
        line = self.get_item(product_id)
        if field == "qty":
            line.qty = to_int(value)
        else:
            setattr(line, field, to_decimal(value))
        return line

    def remove_item(self, product_id):
        self.get_item(product_id)
        del self._lines[product_id]

    def clear(self):
        self._lines.clear()

    # -------------------- derived amounts --------------------
    def priced_items(self):
        """Lines as they will be snapshotted, with disabled features zeroed."""
        changes = {}
        if not self.options.apply_discount:
            changes["discount"] = ZERO
        if not self.options.apply_gst:
            changes["gst"] = ZERO
        return [line.copy(**changes) for line in self._lines.values()]

    def totals(self):
        shipping = self.shipping if self.options.apply_shipping else ZERO
        return calculate_totals(
            self.items,
            shipping=shipping,
            round_off=self.options.round_off,
            apply_gst=self.options.apply_gst,
            apply_discount=self.options.apply_discount,
        )

    @property
    def balance(self):
        return balance_due(self.totals().grand_total, self.paid)

    @property
    def status(self):
        return payment_status(self.totals().grand_total, self.paid)

    def summary(self):
        totals = self.totals()
        return {
            "draft_id": self.draft_id,
            "customer": self.customer.to_dict(),
            "items": [item.to_dict() for item in self.priced_items()],
            "totals": totals.to_dict(),
            "paid": str(self.paid),
            "balance": str(balance_due(totals.grand_total, self.paid)),
            "payment_mode": self.payment_mode,
            "status": payment_status(totals.grand_total, self.paid),
        }
