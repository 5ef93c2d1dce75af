from flask import Blueprint, request, jsonify
from products.product_service import ProductService
from store.record_store import get_record_store
from src.exceptions import error_response
from src.logger import get_logger

bp = Blueprint("products", __name__)
logger = get_logger("ProductRoutes")


def _failed(e):
    body, status = error_response(e)
    if status == 500:
        logger.exception("Product request failed: %s", str(e))
    return jsonify(body), status


@bp.route("/", methods=["GET"])
def list_products():
    try:
        limit = request.args.get("limit", type=int)
        products = ProductService.search_products(get_record_store(), request.args.get("q"), limit)
        return jsonify([p.to_dict() for p in products]), 200
    except Exception as e:
        return _failed(e)


@bp.route("/low-stock", methods=["GET"])
def list_low_stock():
    try:
        products = ProductService.low_stock_products(get_record_store())
        return jsonify([p.to_dict() for p in products]), 200
    except Exception as e:
        return _failed(e)


@bp.route("/", methods=["POST"])
def create_product():
    data = request.get_json() or {}
    try:
        product = ProductService.create_product(get_record_store(), data)
        return jsonify(product.to_dict()), 201
    except Exception as e:
        return _failed(e)


@bp.route("/<int:product_id>", methods=["GET"])
def get_product(product_id):
    try:
        product = ProductService.get_product_by_id(get_record_store(), product_id)
        return jsonify(product.to_dict()), 200
    except Exception as e:
        return _failed(e)


@bp.route("/<int:product_id>", methods=["PUT"])
def update_product(product_id):
    data = request.get_json() or {}
    try:
        product = ProductService.update_product(get_record_store(), product_id, data)
        return jsonify(product.to_dict()), 200
    except Exception as e:
        return _failed(e)


@bp.route("/<int:product_id>", methods=["DELETE"])
def delete_product(product_id):
    try:
        ProductService.delete_product(get_record_store(), product_id)
        return jsonify({"message": "Product deleted successfully"}), 200
    except Exception as e:
        return _failed(e)
