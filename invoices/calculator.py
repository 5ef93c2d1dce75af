"""Invoice totals.

Everything here is a pure function of its arguments. Amounts are kept as
exact ``Decimal`` values; the only rounding is the optional whole-rupee
round-off on the grand total.
"""
from decimal import Decimal, ROUND_HALF_UP

from src.money import to_decimal, ZERO

HUNDRED = Decimal("100")
RUPEE = Decimal("1")


class PricingOptions:
    def __init__(self, round_off=True, apply_gst=True, apply_discount=True, apply_shipping=True):
        self.round_off = round_off
        self.apply_gst = apply_gst
        self.apply_discount = apply_discount
        self.apply_shipping = apply_shipping

    def __repr__(self):
        return (f"<PricingOptions round_off={self.round_off} gst={self.apply_gst} "
                f"discount={self.apply_discount} shipping={self.apply_shipping}>")


class InvoiceTotals:
    FIELDS = ("subtotal", "gst_amount", "cgst", "sgst", "shipping", "raw_total", "round_off", "grand_total")

    def __init__(self, subtotal, gst_amount, cgst, sgst, shipping, raw_total, round_off, grand_total):
        self.subtotal = subtotal
        self.gst_amount = gst_amount
        self.cgst = cgst
        self.sgst = sgst
        self.shipping = shipping
        self.raw_total = raw_total
        self.round_off = round_off
        self.grand_total = grand_total

    def to_dict(self):
        return {field: str(getattr(self, field)) for field in self.FIELDS}

    def __eq__(self, other):
        if not isinstance(other, InvoiceTotals):
            return NotImplemented
        return all(getattr(self, f) == getattr(other, f) for f in self.FIELDS)

    def __repr__(self):
        return f"<InvoiceTotals subtotal={self.subtotal} gst={self.gst_amount} grand_total={self.grand_total}>"


def _field(item, name):
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def _clamped_line(qty, rate, discount):
    # Out-of-range edits are priced as their nearest valid value
    qty = max(to_decimal(qty), ZERO)
    rate = max(to_decimal(rate), ZERO)
    discount = min(max(to_decimal(discount), ZERO), HUNDRED)
    return qty, rate, discount


def taxable_amount(qty, rate, discount=0):
    """qty * rate less the percentage discount."""
    qty, rate, discount = _clamped_line(qty, rate, discount)
    base = qty * rate
    return base - base * discount / HUNDRED


def line_gst(taxable, gst_rate):
    return taxable * max(to_decimal(gst_rate), ZERO) / HUNDRED


def round_to_rupee(amount):
    return amount.quantize(RUPEE, rounding=ROUND_HALF_UP)


def calculate_totals(items, shipping=0, round_off=True, apply_gst=True, apply_discount=True):
    """
    items: sequence of LineItem objects or dicts with qty, rate, discount, gst.
    GST is charged per line at that line's own rate and split equally
    into CGST and SGST.
    """
    subtotal = ZERO
    gst_amount = ZERO

    for item in items:
        discount = _field(item, "discount") if apply_discount else ZERO
        taxable = taxable_amount(_field(item, "qty"), _field(item, "rate"), discount)
        subtotal += taxable
        if apply_gst:
            gst_amount += line_gst(taxable, _field(item, "gst"))

    shipping = max(to_decimal(shipping), ZERO)
    cgst = gst_amount / 2
    sgst = gst_amount - cgst
    raw_total = subtotal + gst_amount + shipping

    if round_off:
        grand_total = round_to_rupee(raw_total)
        adjustment = grand_total - raw_total
    else:
        grand_total = raw_total
        adjustment = ZERO

    return InvoiceTotals(
        subtotal=subtotal,
        gst_amount=gst_amount,
        cgst=cgst,
        sgst=sgst,
        shipping=shipping,
        raw_total=raw_total,
        round_off=adjustment,
        grand_total=grand_total,
    )
