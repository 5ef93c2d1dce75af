from decimal import Decimal
from src.money import to_decimal, to_int

GST_RATES = (0, 5, 12, 18, 28)
UNITS = ("Nos", "Kg", "Litre", "Box", "Meter", "Pcs", "Set")

class Product:
    def __init__(self, id=None, name="", code="", category="", hsn="",
                 purchase_price=0, selling_price=0, gst=18, stock=0,
                 min_stock=0, unit="Nos", supplier=""):
        # Product ID (unique, never reassigned)
        self.id = id

        # Product Name
        self.name = name or ""

        # SKU / Item Code
        self.code = code or ""

        # Category
        self.category = category or ""

        # HSN Code (tax classification, informational)
        self.hsn = hsn or ""

        # Purchase Price (Cost Price)
        self.purchase_price = to_decimal(purchase_price)

        # Selling Price (default line rate on invoices)
        self.selling_price = to_decimal(selling_price)

        # GST rate in percent
        self.gst = to_decimal(gst)

        # Quantity in Stock
        self.stock = to_int(stock)

        # Reorder Level (Minimum Stock)
        self.min_stock = to_int(min_stock)

        # Unit of Measure (Nos, Kg, Litre, etc.)
        self.unit = unit or "Nos"

        # Supplier name
        self.supplier = supplier or ""

    @property
    def is_low_stock(self):
        return self.stock <= self.min_stock

    @property
    def stock_value(self):
        return self.stock * self.purchase_price

    @property
    def margin(self):
        return self.selling_price - self.purchase_price

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data.get("id"),
            name=data.get("name"),
            code=data.get("code"),
            category=data.get("category"),
            hsn=data.get("hsn"),
            purchase_price=data.get("purchase_price", 0),
            selling_price=data.get("selling_price", 0),
            gst=data.get("gst", 18),
            stock=data.get("stock", 0),
            min_stock=data.get("min_stock", 0),
            unit=data.get("unit"),
            supplier=data.get("supplier"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "code": self.code,
            "category": self.category,
            "hsn": self.hsn,
            "purchase_price": str(self.purchase_price),
            "selling_price": str(self.selling_price),
            "gst": str(self.gst),
            "stock": self.stock,
            "min_stock": self.min_stock,
            "unit": self.unit,
            "supplier": self.supplier,
        }

    def __repr__(self):
        return f"<Product {self.id} {self.code}>"
