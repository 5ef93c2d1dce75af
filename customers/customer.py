CUSTOMER_TYPES = ("Retail", "Wholesale")

class Customer:
    def __init__(self, id=None, name="", mobile="", address="", gst="", type="Retail"):
        # Customer ID (None for a walk-in customer typed on the invoice)
        self.id = id

        # Contact Person / Full Name
        self.name = name or ""

        # Phone Number
        self.mobile = mobile or ""

        # Billing Address
        self.address = address or ""

        # GST / Tax Number (optional)
        self.gst = gst or ""

        # Retail / Wholesale
        self.type = type or "Retail"

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data.get("id"),
            name=data.get("name"),
            mobile=data.get("mobile"),
            address=data.get("address"),
            gst=data.get("gst"),
            type=data.get("type"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "mobile": self.mobile,
            "address": self.address,
            "gst": self.gst,
            "type": self.type,
        }

    def __repr__(self):
        return f"<Customer {self.id} {self.name}>"
