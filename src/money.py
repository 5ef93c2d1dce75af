from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

ZERO = Decimal("0")
PAISE = Decimal("0.01")


def to_decimal(value, default=ZERO):
    """Coerce form/JSON input to Decimal. Floats go through str() so 0.1 stays 0.1."""
    if value is None or value == "":
        return default
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        return Decimal(int(value))
    try:
        d = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return default
    # NaN and Infinity cannot be compared or priced
    return d if d.is_finite() else default


def to_int(value, default=0):
    if value is None or value == "":
        return default
    try:
        return int(to_decimal(value, Decimal(default)))
    except (InvalidOperation, ValueError, OverflowError):
        return default


def to_paise(amount):
    return to_decimal(amount).quantize(PAISE, rounding=ROUND_HALF_UP)


def format_inr(amount, symbol="₹"):
    """Indian digit grouping: 123456.5 -> ₹1,23,456.50"""
    value = to_paise(amount)
    sign = "-" if value < 0 else ""
    whole, fraction = f"{abs(value):.2f}".split(".")
    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join(groups + [tail])
    return f"{sign}{symbol}{whole}.{fraction}"
