import os
from datetime import datetime
from jinja2 import Environment, FileSystemLoader, select_autoescape

from src.money import format_inr, to_decimal

TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")


def _percent(value):
    # 18.00 -> 18, 2.50 -> 2.5
    value = to_decimal(value)
    return format(value.normalize(), "f")


def _environment():
    env = Environment(loader=FileSystemLoader(TEMPLATE_DIR), autoescape=select_autoescape(["html"]))
    env.filters["inr"] = format_inr
    env.filters["percent"] = _percent
    return env


class InvoicePrintService:
    @staticmethod
    def render_html(invoice, settings, generated_at=None):
        """
        Render the printable tax invoice.
        invoice and settings are the stored snapshots; nothing is recomputed
        except the per-line amount, which is derived from qty/rate/discount.
        """
        template = _environment().get_template("invoice_print.html")
        return template.render(
            invoice=invoice,
            settings=settings,
            generated_at=generated_at or datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        )

    @staticmethod
    def filename(invoice):
        safe_no = "".join(c if c.isalnum() or c in "-_" else "_" for c in invoice.invoice_no)
        return f"invoice_{safe_no}.html"
