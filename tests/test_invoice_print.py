from decimal import Decimal

from invoices.invoice_print import InvoicePrintService
from invoices.invoice_service import InvoiceService
from settings.settings_service import SettingsService
from src.money import format_inr


def test_format_inr_uses_indian_grouping():
    assert format_inr(Decimal("99120")) == "₹99,120.00"
    assert format_inr("123456.5") == "₹1,23,456.50"
    assert format_inr(12345678) == "₹1,23,45,678.00"
    assert format_inr("0.18") == "₹0.18"
    assert format_inr("-0.3") == "-₹0.30"


def test_print_view_renders_invoice_and_business(seeded_store):
    invoice = InvoiceService.get_invoice(seeded_store, 2)
    settings = SettingsService.get_settings(seeded_store)

    html = InvoicePrintService.render_html(invoice, settings, generated_at="2026-02-15 10:00:00")

    assert "AKE-2026-1002" in html
    assert "AK Enterprises" in html
    assert "Suresh Kumar" in html
    assert "USB-C Hub 7-in-1" in html
    assert "₹2,250.00" in html
    assert "₹337.41" in html
    assert "₹4,474.00" in html
    assert "₹2,474.00" in html
    assert "SBIN0001234" in html
    assert "Goods once sold will not be taken back." in html
    assert "18%" in html


def test_print_filename_is_safe(seeded_store):
    invoice = InvoiceService.get_invoice(seeded_store, 1)
    invoice.invoice_no = "AKE/2026 1001"
    assert InvoicePrintService.filename(invoice) == "invoice_AKE_2026_1001.html"
