from datetime import date

from invoices.calculator import HUNDRED
from invoices.invoice import (
    Invoice, balance_due, payment_status, STATUS_CANCELLED, INVOICE_STATUSES,
)
from products.product_service import ProductService
from settings.company_settings import PAYMENT_MODES
from settings.settings_service import SettingsService
from store.record_store import INVOICES
from src.exceptions import BillingError, ValidationError, NotFoundError, ConsistencyError
from src.money import ZERO
from src.logger import get_logger

logger = get_logger("InvoiceService")


class SettlementResult:
    def __init__(self, invoice, skipped_product_ids=None, replayed=False):
        self.invoice = invoice
        # Lines whose product was gone, so no stock was taken for them
        self.skipped_product_ids = list(skipped_product_ids or [])
        # True when the draft had already been settled and nothing was written
        self.replayed = replayed

    @property
    def is_partial(self):
        return bool(self.skipped_product_ids)

    def to_dict(self):
        return {
            "invoice": self.invoice.to_dict(),
            "skipped_product_ids": self.skipped_product_ids,
            "replayed": self.replayed,
        }


class InvoiceService:
    @staticmethod
    def validate_draft(draft):
        if not (draft.customer.name or "").strip():
            raise ValidationError("Please enter customer name")
        if draft.is_empty:
            raise ValidationError("Please add at least one item")
        for item in draft.priced_items():
            if item.qty < 1:
                raise ValidationError(f"Quantity for {item.name or item.product_id} must be at least 1")
            if item.rate < ZERO:
                raise ValidationError(f"Rate for {item.name or item.product_id} cannot be negative")
            if not ZERO <= item.discount <= HUNDRED:
                raise ValidationError(f"Discount for {item.name or item.product_id} must be between 0 and 100")
        if draft.paid < ZERO:
            raise ValidationError("Paid amount cannot be negative")
        if draft.payment_mode not in PAYMENT_MODES:
            raise ValidationError(f"Payment mode must be one of {', '.join(PAYMENT_MODES)}")

    @staticmethod
    def settle(store, draft, invoice_date=None):
        """
        Turn a draft into a persisted invoice.

        Within one store transaction:
          - number the invoice from the settings prefix and counter
          - append the invoice with customer and line snapshots
          - take each line's quantity off product stock, floored at 0
          - advance the invoice counter by one
        Either all of it is written or none of it is.
        """
        InvoiceService.validate_draft(draft)
        invoice_date = invoice_date or date.today().isoformat()

        try:
            with store.transaction():
                existing = InvoiceService.find_by_draft_id(store, draft.draft_id)
                if existing:
                    logger.info("Draft %s already settled as %s, returning it", draft.draft_id, existing.invoice_no)
                    return SettlementResult(existing, replayed=True)

                settings = SettingsService.get_settings(store)
                totals = draft.totals()
                customer = draft.customer

                invoice = Invoice(
                    id=store.next_id(INVOICES),
                    invoice_no=settings.next_invoice_no(),
                    date=invoice_date,
                    customer_id=customer.id,
                    customer_name=customer.name.strip(),
                    customer_mobile=customer.mobile,
                    customer_address=customer.address,
                    customer_gst=customer.gst,
                    items=draft.priced_items(),
                    subtotal=totals.subtotal,
                    gst_amount=totals.gst_amount,
                    cgst=totals.cgst,
                    sgst=totals.sgst,
                    shipping=totals.shipping,
                    round_off=totals.round_off,
                    grand_total=totals.grand_total,
                    paid=draft.paid,
                    balance=balance_due(totals.grand_total, draft.paid),
                    payment_mode=draft.payment_mode,
                    status=payment_status(totals.grand_total, draft.paid),
                    draft_id=draft.draft_id,
                )
                store.append(INVOICES, invoice.to_dict())

                skipped = []
                for item in invoice.items:
                    if ProductService.decrement_stock(store, item.product_id, item.qty) is None:
                        skipped.append(item.product_id)

                SettingsService.advance_invoice_counter(store)
        except BillingError:
            raise
        except Exception as e:
            logger.exception("Settlement of draft %s aborted: %s", draft.draft_id, str(e))
            raise ConsistencyError("Invoice could not be saved; no changes were applied") from e

        if skipped:
            logger.warning("Invoice %s: no stock taken for missing products %s", invoice.invoice_no, skipped)
        logger.info("Invoice %s saved for %s, total %s (%s)",
                    invoice.invoice_no, invoice.customer_name, invoice.grand_total, invoice.status)
        return SettlementResult(invoice, skipped_product_ids=skipped)

    @staticmethod
    def find_by_draft_id(store, draft_id):
        for data in store.get_all(INVOICES):
            if draft_id and data.get("draft_id") == draft_id:
                return Invoice.from_dict(data)
        return None

    @staticmethod
    def get_invoice(store, invoice_id):
        data = store.find(INVOICES, invoice_id)
        if not data:
            raise NotFoundError(f"Invoice id {invoice_id} not found")
        return Invoice.from_dict(data)

    @staticmethod
    def list_invoices(store, search=None, status=None):
        """Newest first, matching invoice number or customer name, optionally one status."""
        if status and status != "All" and status not in INVOICE_STATUSES:
            raise ValidationError(f"Unknown status '{status}'")
        q = (search or "").strip().lower()

        result = []
        for data in reversed(store.get_all(INVOICES)):
            invoice = Invoice.from_dict(data)
            if q and q not in invoice.invoice_no.lower() and q not in invoice.customer_name.lower():
                continue
            if status and status != "All" and invoice.status != status:
                continue
            result.append(invoice)
        return result

    @staticmethod
    def cancel_invoice(store, invoice_id):
        """Mark an invoice Cancelled. Amounts and stock stay as they were."""
        invoice = InvoiceService.get_invoice(store, invoice_id)
        if invoice.is_cancelled:
            raise ValidationError(f"Invoice {invoice.invoice_no} is already cancelled")
        store.update(INVOICES, invoice.id, {"status": STATUS_CANCELLED})
        invoice.status = STATUS_CANCELLED
        logger.info("Invoice %s cancelled", invoice.invoice_no)
        return invoice
