from flask import Blueprint, request, jsonify, make_response
from invoices.invoice_draft import InvoiceDraft
from invoices.invoice_print import InvoicePrintService
from invoices.invoice_service import InvoiceService
from customers.customer_service import CustomerService
from products.product_service import ProductService
from settings.settings_service import SettingsService
from store.record_store import get_record_store
from src.exceptions import ValidationError, error_response
from src.money import to_int
from src.logger import get_logger

bp = Blueprint("invoices", __name__)
logger = get_logger("InvoiceRoutes")


def _failed(e):
    body, status = error_response(e)
    if status == 500:
        logger.exception("Invoice request failed: %s", str(e))
    return jsonify(body), status


def build_draft(store, payload):
    """
    payload: {customer: {id?, name, mobile, address, gst},
              items: [{product_id, qty?, rate?, discount?}],
              shipping?, paid?, payment_mode?, draft_id?}
    """
    items = payload.get("items")
    if not items or not isinstance(items, list):
        raise ValidationError("items list is required")

    settings = SettingsService.get_settings(store)
    draft = InvoiceDraft.from_settings(settings, draft_id=payload.get("draft_id"))

    customer = dict(payload.get("customer") or {})
    if customer.get("id") and not customer.get("name"):
        customer = CustomerService.get_customer_by_id(store, to_int(customer["id"])).to_dict()
    draft.set_customer(customer)

    for it in items:
        if not isinstance(it, dict) or "product_id" not in it:
            raise ValidationError(f"Invalid item format: {it}")
        product = ProductService.get_product_by_id(store, to_int(it["product_id"], -1))
        # Repeated rows for one product add up their quantities
        earlier_qty = draft.get_item(product.id).qty if product.id in draft else 0
        draft.add_item(product)
        for field in InvoiceDraft.EDITABLE_FIELDS:
            if field not in it:
                continue
            value = it[field]
            if field == "qty":
                value = earlier_qty + to_int(value)
            draft.update_item(product.id, field, value)

    draft.shipping = payload.get("shipping", 0)
    draft.paid = payload.get("paid", 0)
    if payload.get("payment_mode"):
        draft.payment_mode = payload["payment_mode"]
    return draft


@bp.route("/preview", methods=["POST"])
def preview_invoice():
    payload = request.get_json() or {}
    try:
        draft = build_draft(get_record_store(), payload)
        return jsonify(draft.summary()), 200
    except Exception as e:
        return _failed(e)


@bp.route("/", methods=["POST"])
def create_invoice():
    payload = request.get_json() or {}
    store = get_record_store()
    try:
        draft = build_draft(store, payload)
        result = InvoiceService.settle(store, draft)
        return jsonify(result.to_dict()), 200 if result.replayed else 201
    except Exception as e:
        return _failed(e)


@bp.route("/", methods=["GET"])
def list_invoices():
    try:
        invoices = InvoiceService.list_invoices(
            get_record_store(),
            search=request.args.get("q"),
            status=request.args.get("status"),
        )
        return jsonify([i.to_dict() for i in invoices]), 200
    except Exception as e:
        return _failed(e)


@bp.route("/<int:invoice_id>", methods=["GET"])
def get_invoice(invoice_id):
    try:
        invoice = InvoiceService.get_invoice(get_record_store(), invoice_id)
        return jsonify(invoice.to_dict()), 200
    except Exception as e:
        return _failed(e)


@bp.route("/<int:invoice_id>/cancel", methods=["PUT"])
def cancel_invoice(invoice_id):
    try:
        invoice = InvoiceService.cancel_invoice(get_record_store(), invoice_id)
        return jsonify({"message": "Invoice cancelled", "invoice": invoice.to_dict()}), 200
    except Exception as e:
        return _failed(e)


@bp.route("/<int:invoice_id>/print", methods=["GET"])
def print_invoice(invoice_id):
    store = get_record_store()
    try:
        invoice = InvoiceService.get_invoice(store, invoice_id)
        settings = SettingsService.get_settings(store)
        html = InvoicePrintService.render_html(invoice, settings)
        response = make_response(html)
        response.headers["Content-Type"] = "text/html; charset=utf-8"
        if request.args.get("download") == "1":
            response.headers["Content-Disposition"] = f"attachment; filename={InvoicePrintService.filename(invoice)}"
        return response
    except Exception as e:
        return _failed(e)
