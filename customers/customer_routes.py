from flask import Blueprint, request, jsonify
from customers.customer_service import CustomerService
from store.record_store import get_record_store
from src.exceptions import error_response
from src.logger import get_logger

bp = Blueprint("customers", __name__)
logger = get_logger("CustomerRoutes")


def _failed(e):
    body, status = error_response(e)
    if status == 500:
        logger.exception("Customer request failed: %s", str(e))
    return jsonify(body), status


# -------------------- LIST CUSTOMERS --------------------
@bp.route("/", methods=["GET"])
def list_customers():
    try:
        limit = request.args.get("limit", type=int)
        customers = CustomerService.search_customers(get_record_store(), request.args.get("q"), limit)
        return jsonify([c.to_dict() for c in customers]), 200
    except Exception as e:
        return _failed(e)


# -------------------- CREATE CUSTOMER --------------------
@bp.route("/", methods=["POST"])
def create_customer():
    data = request.get_json() or {}
    try:
        customer = CustomerService.create_customer(get_record_store(), data)
        return jsonify(customer.to_dict()), 201
    except Exception as e:
        return _failed(e)


# -------------------- GET CUSTOMER --------------------
@bp.route("/<int:customer_id>", methods=["GET"])
def get_customer(customer_id):
    try:
        customer = CustomerService.get_customer_by_id(get_record_store(), customer_id)
        return jsonify(customer.to_dict()), 200
    except Exception as e:
        return _failed(e)


# -------------------- UPDATE CUSTOMER --------------------
@bp.route("/<int:customer_id>", methods=["PUT"])
def update_customer(customer_id):
    data = request.get_json() or {}
    try:
        customer = CustomerService.update_customer(get_record_store(), customer_id, data)
        return jsonify(customer.to_dict()), 200
    except Exception as e:
        return _failed(e)


# -------------------- DELETE CUSTOMER --------------------
@bp.route("/<int:customer_id>", methods=["DELETE"])
def delete_customer(customer_id):
    try:
        CustomerService.delete_customer(get_record_store(), customer_id)
        return jsonify({"message": "Customer deleted successfully"}), 200
    except Exception as e:
        return _failed(e)
