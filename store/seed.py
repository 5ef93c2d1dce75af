from store.record_store import SETTINGS, PRODUCTS, CUSTOMERS, INVOICES, SEEDED
from src.logger import get_logger

logger = get_logger("Seed")

DEMO_SETTINGS = {
    "business_name": "AK Enterprises",
    "owner_name": "Anil Kumar",
    "mobile": "9876543210",
    "email": "ak@akenterprises.com",
    "gst": "27AABCU9603R1ZX",
    "pan": "AABCU9603R",
    "address": "123, Main Market, Pune, Maharashtra - 411001",
    "bank_name": "State Bank of India",
    "account_no": "1234567890",
    "ifsc": "SBIN0001234",
    "upi": "ak@upi",
    "invoice_prefix": "AKE-2026-",
    "starting_invoice": 1001,
    "current_invoice": 1003,
    "default_gst": "18",
    "enable_gst": True,
    "enable_discount": True,
    "enable_shipping": True,
    "round_off": True,
    "default_payment_mode": "Cash",
    "terms": "1. Goods once sold will not be taken back.\n2. Subject to local jurisdiction.\n3. E. & O.E.",
    "notes": "Thank you for your business!",
}

DEMO_PRODUCTS = [
    {"id": 1, "name": "HP Laptop 15s", "code": "HP-15S-001", "category": "Electronics", "hsn": "8471",
     "purchase_price": "35000", "selling_price": "42000", "gst": "18", "stock": 15, "min_stock": 3,
     "unit": "Nos", "supplier": "HP Distributors"},
    {"id": 2, "name": "Dell Mouse Wireless", "code": "DELL-MS-001", "category": "Accessories", "hsn": "8471",
     "purchase_price": "450", "selling_price": "750", "gst": "18", "stock": 45, "min_stock": 10,
     "unit": "Nos", "supplier": "Dell India"},
    {"id": 3, "name": "USB-C Hub 7-in-1", "code": "USB-HUB-001", "category": "Accessories", "hsn": "8536",
     "purchase_price": "800", "selling_price": "1499", "gst": "18", "stock": 30, "min_stock": 5,
     "unit": "Nos", "supplier": "AmazonBasics"},
    {"id": 4, "name": "A4 Paper Ream 500 Sheets", "code": "A4-PAPER-001", "category": "Stationery", "hsn": "4802",
     "purchase_price": "180", "selling_price": "280", "gst": "12", "stock": 200, "min_stock": 50,
     "unit": "Box", "supplier": "Paper World"},
    {"id": 5, "name": "Printer Ink Cartridge Black", "code": "INK-BLK-001", "category": "Stationery", "hsn": "3215",
     "purchase_price": "320", "selling_price": "550", "gst": "18", "stock": 2, "min_stock": 5,
     "unit": "Nos", "supplier": "HP Distributors"},
    {"id": 6, "name": "Hdmi Cable 2m", "code": "HDMI-2M-001", "category": "Cables", "hsn": "8544",
     "purchase_price": "120", "selling_price": "299", "gst": "18", "stock": 60, "min_stock": 10,
     "unit": "Nos", "supplier": "Generic"},
]

DEMO_CUSTOMERS = [
    {"id": 1, "name": "Raj Electronics", "mobile": "9011223344", "address": "Pune", "gst": "27RAJEL1234A1Z5", "type": "Wholesale"},
    {"id": 2, "name": "Suresh Kumar", "mobile": "9822334455", "address": "Mumbai", "gst": "", "type": "Retail"},
    {"id": 3, "name": "City Computers", "mobile": "9733445566", "address": "Nashik", "gst": "27CITYC5678B1Z3", "type": "Wholesale"},
]

DEMO_INVOICES = [
    {
        "id": 1, "invoice_no": "AKE-2026-1001", "date": "2026-02-10", "customer_id": 1,
        "customer_name": "Raj Electronics", "customer_mobile": "9011223344", "customer_address": "Pune",
        "customer_gst": "27RAJEL1234A1Z5",
        "items": [{"product_id": 1, "name": "HP Laptop 15s", "code": "HP-15S-001", "qty": 2, "rate": "42000",
                   "discount": "0", "gst": "18", "amount": "84000"}],
        "subtotal": "84000", "gst_amount": "15120", "cgst": "7560", "sgst": "7560", "shipping": "0",
        "round_off": "0", "grand_total": "99120", "paid": "99120", "balance": "0",
        "payment_mode": "Bank Transfer", "status": "Paid", "draft_id": None,
    },
    {
        "id": 2, "invoice_no": "AKE-2026-1002", "date": "2026-02-15", "customer_id": 2,
        "customer_name": "Suresh Kumar", "customer_mobile": "9822334455", "customer_address": "Mumbai",
        "customer_gst": "",
        "items": [
            {"product_id": 2, "name": "Dell Mouse Wireless", "code": "DELL-MS-001", "qty": 3, "rate": "750",
             "discount": "0", "gst": "18", "amount": "2250"},
            {"product_id": 3, "name": "USB-C Hub 7-in-1", "code": "USB-HUB-001", "qty": 1, "rate": "1499",
             "discount": "0", "gst": "18", "amount": "1499"},
        ],
        "subtotal": "3749", "gst_amount": "674.82", "cgst": "337.41", "sgst": "337.41", "shipping": "50",
        "round_off": "0.18", "grand_total": "4474", "paid": "2000", "balance": "2474",
        "payment_mode": "Cash", "status": "Partial", "draft_id": None,
    },
]


def seed_demo_data(store):
    """Load the demo business once; later calls are no-ops."""
    if store.get(SEEDED):
        return False
    with store.transaction():
        store.set(SETTINGS, DEMO_SETTINGS)
        store.set(PRODUCTS, DEMO_PRODUCTS)
        store.set(CUSTOMERS, DEMO_CUSTOMERS)
        store.set(INVOICES, DEMO_INVOICES)
        store.set(SEEDED, True)
    logger.info("Demo data seeded: %d products, %d customers, %d invoices",
                len(DEMO_PRODUCTS), len(DEMO_CUSTOMERS), len(DEMO_INVOICES))
    return True
