from invoices.calculator import taxable_amount, line_gst
from src.money import to_decimal, to_int

class LineItem:
    """One row of a draft or invoice; name, code and gst are copied from the product."""

    def __init__(self, product_id, name="", code="", qty=1, rate=0, discount=0, gst=0):
        self.product_id = product_id
        self.name = name or ""
        self.code = code or ""
        self.qty = to_int(qty)
        self.rate = to_decimal(rate)
        self.discount = to_decimal(discount)
        self.gst = to_decimal(gst)

    @classmethod
    def from_product(cls, product):
        return cls(
            product_id=product.id,
            name=product.name,
            code=product.code,
            qty=1,
            rate=product.selling_price,
            discount=0,
            gst=product.gst,
        )

    @property
    def amount(self):
        return taxable_amount(self.qty, self.rate, self.discount)

    @property
    def gst_amount(self):
        return line_gst(self.amount, self.gst)

    def copy(self, **changes):
        data = {
            "product_id": self.product_id,
            "name": self.name,
            "code": self.code,
            "qty": self.qty,
            "rate": self.rate,
            "discount": self.discount,
            "gst": self.gst,
        }
        data.update(changes)
        return LineItem(**data)

    @classmethod
    def from_dict(cls, data):
        return cls(
            product_id=data.get("product_id"),
            name=data.get("name"),
            code=data.get("code"),
            qty=data.get("qty", 1),
            rate=data.get("rate", 0),
            discount=data.get("discount", 0),
            gst=data.get("gst", 0),
        )

    def to_dict(self):
        return {
            "product_id": self.product_id,
            "name": self.name,
            "code": self.code,
            "qty": self.qty,
            "rate": str(self.rate),
            "discount": str(self.discount),
            "gst": str(self.gst),
            "amount": str(self.amount),
        }

    def __repr__(self):
        return f"<LineItem {self.product_id} x{self.qty} @ {self.rate}>"
