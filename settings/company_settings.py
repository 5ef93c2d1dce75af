from invoices.calculator import PricingOptions
from src.money import to_decimal, to_int

PAYMENT_MODES = ("Cash", "UPI", "Card", "Bank Transfer", "Credit")

DEFAULT_INVOICE_PREFIX = "INV-"
DEFAULT_STARTING_INVOICE = 1001

class CompanySettings:
    """Business profile plus the invoice counter; one per store."""

    FIELDS = (
        "business_name", "owner_name", "mobile", "alt_mobile", "email", "gst", "pan", "address",
        "bank_name", "account_no", "ifsc", "upi",
        "invoice_prefix", "starting_invoice", "current_invoice", "default_gst",
        "enable_gst", "enable_discount", "enable_shipping", "round_off",
        "default_payment_mode", "terms", "notes",
    )

    def __init__(self, **kwargs):
        # Business Information
        self.business_name = kwargs.get("business_name") or ""
        self.owner_name = kwargs.get("owner_name") or ""
        self.mobile = kwargs.get("mobile") or ""
        self.alt_mobile = kwargs.get("alt_mobile") or ""
        self.email = kwargs.get("email") or ""
        self.gst = kwargs.get("gst") or ""
        self.pan = kwargs.get("pan") or ""
        self.address = kwargs.get("address") or ""

        # Bank Details
        self.bank_name = kwargs.get("bank_name") or ""
        self.account_no = kwargs.get("account_no") or ""
        self.ifsc = kwargs.get("ifsc") or ""
        self.upi = kwargs.get("upi") or ""

        # Invoice numbering
        self.invoice_prefix = kwargs.get("invoice_prefix") or DEFAULT_INVOICE_PREFIX
        self.starting_invoice = to_int(kwargs.get("starting_invoice"), DEFAULT_STARTING_INVOICE)
        self.current_invoice = to_int(kwargs.get("current_invoice"), self.starting_invoice)

        # Tax & pricing toggles
        self.default_gst = to_decimal(kwargs.get("default_gst"), to_decimal(18))
        self.enable_gst = _flag(kwargs.get("enable_gst"))
        self.enable_discount = _flag(kwargs.get("enable_discount"))
        self.enable_shipping = _flag(kwargs.get("enable_shipping"))
        self.round_off = _flag(kwargs.get("round_off"))

        self.default_payment_mode = kwargs.get("default_payment_mode") or "Cash"
        self.terms = kwargs.get("terms") or ""
        self.notes = kwargs.get("notes") or ""

    def next_invoice_no(self):
        return f"{self.invoice_prefix}{self.current_invoice}"

    def pricing_options(self):
        return PricingOptions(
            round_off=self.round_off,
            apply_gst=self.enable_gst,
            apply_discount=self.enable_discount,
            apply_shipping=self.enable_shipping,
        )

    @classmethod
    def from_dict(cls, data):
        return cls(**{k: v for k, v in (data or {}).items() if k in cls.FIELDS})

    def to_dict(self):
        data = {field: getattr(self, field) for field in self.FIELDS}
        data["default_gst"] = str(self.default_gst)
        return data


def _flag(value, default=True):
    # Toggles are on unless explicitly switched off
    if value is None or value == "":
        return default
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)
