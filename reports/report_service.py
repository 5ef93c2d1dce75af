"""Read-only reports over the stored invoices and products."""
from datetime import datetime, date
from decimal import Decimal

from invoices.invoice import Invoice
from products.product import Product
from settings.settings_service import SettingsService
from store.record_store import INVOICES, PRODUCTS, CUSTOMERS
from src.exceptions import ValidationError
from src.money import to_decimal, ZERO

PROFIT_BASES = ("default_gst", "line_gst")
HUNDRED = Decimal("100")


def default_date_range(today=None):
    today = today or date.today()
    return today.replace(day=1).isoformat(), today.isoformat()


def filter_by_date(invoices, date_from=None, date_to=None):
    """ISO dates sort as strings, so the range check is a plain comparison."""
    return [
        inv for inv in invoices
        if (not date_from or (inv.date or "") >= date_from) and (not date_to or (inv.date or "") <= date_to)
    ]


def _sum(values):
    return sum(values, ZERO)


def recent_months(today, count=6):
    """YYYY-MM keys for the last `count` months, oldest first, ending with today's month."""
    year, month = today.year, today.month
    keys = []
    for _ in range(count):
        keys.insert(0, f"{year:04d}-{month:02d}")
        year, month = (year - 1, 12) if month == 1 else (year, month - 1)
    return keys


def monthly_sales(invoices, today, count=6):
    totals = {key: ZERO for key in recent_months(today, count)}
    for inv in invoices:
        key = (inv.date or "")[:7]
        if key in totals:
            totals[key] += inv.grand_total
    return [{"month": key, "total": total} for key, total in totals.items()]


def _report_header(name, date_from=None, date_to=None):
    header = {
        "report_id": f"RPT-{datetime.now().strftime('%Y-%m-%d-%H%M')}",
        "report_name": name,
        "generated_date": datetime.now().isoformat(),
    }
    if date_from or date_to:
        header["date_range"] = {"start_date": date_from, "end_date": date_to}
    return header


class ReportService:
    @staticmethod
    def _invoices(store, date_from=None, date_to=None):
        invoices = [Invoice.from_dict(i) for i in store.get_all(INVOICES)]
        return filter_by_date(invoices, date_from, date_to)

    @staticmethod
    def _products(store):
        return [Product.from_dict(p) for p in store.get_all(PRODUCTS)]

    @staticmethod
    def generate_sales_report(store, date_from=None, date_to=None):
        invoices = ReportService._invoices(store, date_from, date_to)
        rows = [{
            "invoice_no": inv.invoice_no,
            "date": inv.date,
            "customer_name": inv.customer_name,
            "subtotal": inv.subtotal,
            "gst_amount": inv.gst_amount,
            "grand_total": inv.grand_total,
            "paid": inv.paid,
            "balance": inv.balance,
            "status": inv.status,
        } for inv in invoices]

        return {
            **_report_header("Sales Report", date_from, date_to),
            "summary": {
                "total_sales": _sum(inv.grand_total for inv in invoices),
                "total_collected": _sum(inv.paid for inv in invoices),
                "total_pending": _sum(inv.balance for inv in invoices),
                "total_gst": _sum(inv.gst_amount for inv in invoices),
                "total_invoices": len(invoices),
            },
            "rows": rows,
        }

    @staticmethod
    def generate_gst_report(store, date_from=None, date_to=None):
        invoices = ReportService._invoices(store, date_from, date_to)
        rows = [{
            "invoice_no": inv.invoice_no,
            "date": inv.date,
            "customer_name": inv.customer_name,
            "customer_gst": inv.customer_gst,
            "taxable_amount": inv.subtotal,
            "cgst": inv.cgst,
            "sgst": inv.sgst,
            "total_gst": inv.gst_amount,
        } for inv in invoices]

        return {
            **_report_header("GST Report", date_from, date_to),
            "summary": {
                "taxable_amount": _sum(inv.subtotal for inv in invoices),
                "cgst": _sum(inv.cgst for inv in invoices),
                "sgst": _sum(inv.sgst for inv in invoices),
                "total_gst": _sum(inv.gst_amount for inv in invoices),
            },
            "rows": rows,
        }

    @staticmethod
    def generate_stock_report(store):
        products = ReportService._products(store)
        rows = [{
            "product_id": p.id,
            "name": p.name,
            "code": p.code,
            "category": p.category,
            "stock": p.stock,
            "min_stock": p.min_stock,
            "unit": p.unit,
            "purchase_price": p.purchase_price,
            "selling_price": p.selling_price,
            "stock_value": p.stock_value,
            "low_stock": p.is_low_stock,
            "stock_status": "Out of Stock" if p.stock == 0 else "Low Stock" if p.is_low_stock else "In Stock",
        } for p in products]

        return {
            **_report_header("Stock Report"),
            "summary": {
                "total_stock_value": _sum(p.stock_value for p in products),
                "total_products": len(products),
                "low_stock_items": len([p for p in products if p.is_low_stock]),
                "out_of_stock_items": len([p for p in products if p.stock == 0]),
            },
            "rows": rows,
        }

    @staticmethod
    def generate_outstanding_report(store, date_from=None, date_to=None):
        invoices = [
            inv for inv in ReportService._invoices(store, date_from, date_to)
            if inv.balance > ZERO and not inv.is_cancelled
        ]
        rows = [{
            "invoice_no": inv.invoice_no,
            "date": inv.date,
            "customer_name": inv.customer_name,
            "customer_mobile": inv.customer_mobile,
            "grand_total": inv.grand_total,
            "paid": inv.paid,
            "balance": inv.balance,
            "status": inv.status,
        } for inv in invoices]

        return {
            **_report_header("Outstanding Report", date_from, date_to),
            "summary": {
                "total_outstanding": _sum(inv.balance for inv in invoices),
                "invoice_count": len(invoices),
            },
            "rows": rows,
        }

    @staticmethod
    def estimate_profit(invoices, products, default_gst, basis="default_gst"):
        """
        Sum of qty * (rate with GST backed out - purchase price) over every line.

        "default_gst" treats every stored rate as inclusive of the current
        default GST rate; "line_gst" backs out the rate each line was billed at.
        Lines whose product is gone count a purchase price of 0.
        """
        if basis not in PROFIT_BASES:
            raise ValidationError(f"Profit basis must be one of {', '.join(PROFIT_BASES)}")
        cost = {p.id: p.purchase_price for p in products}
        default_divisor = 1 + to_decimal(default_gst) / HUNDRED

        profit = ZERO
        for inv in invoices:
            for item in inv.items:
                divisor = default_divisor if basis == "default_gst" else 1 + item.gst / HUNDRED
                profit += item.qty * (item.rate / divisor - cost.get(item.product_id, ZERO))
        return profit

    @staticmethod
    def generate_dashboard_report(store, today=None, profit_basis="default_gst"):
        today = today or date.today()
        today_str = today.isoformat()
        month_prefix = today_str[:7]

        invoices = ReportService._invoices(store)
        products = ReportService._products(store)
        settings = SettingsService.get_settings(store)
        low_stock = [p for p in products if p.is_low_stock]

        return {
            "today_sales": _sum(i.grand_total for i in invoices if i.date == today_str),
            "month_sales": _sum(i.grand_total for i in invoices if (i.date or "").startswith(month_prefix)),
            "total_profit": ReportService.estimate_profit(invoices, products, settings.default_gst, profit_basis),
            "profit_basis": profit_basis,
            "pending_dues": _sum(i.balance for i in invoices if i.balance > ZERO and not i.is_cancelled),
            "monthly_sales": monthly_sales(invoices, today),
            "low_stock": [{"id": p.id, "name": p.name, "stock": p.stock, "min_stock": p.min_stock} for p in low_stock],
            "counts": {
                "products": len(products),
                "customers": len(store.get_all(CUSTOMERS)),
                "invoices": len(invoices),
            },
            "top_products": [
                {"id": p.id, "name": p.name, "margin": p.margin}
                for p in sorted(products, key=lambda p: p.margin, reverse=True)[:5]
            ],
            "recent_invoices": [
                {"id": i.id, "invoice_no": i.invoice_no, "customer_name": i.customer_name,
                 "grand_total": i.grand_total, "status": i.status}
                for i in list(reversed(invoices))[:5]
            ],
        }
