from products.product import Product, GST_RATES
from store.record_store import PRODUCTS
from src.exceptions import ValidationError, NotFoundError
from src.money import to_decimal, to_int, ZERO
from src.logger import get_logger

logger = get_logger("ProductService")

class ProductService:
    @staticmethod
    def _validate(product):
        if not product.name or not product.code:
            raise ValidationError("Name and Code are required")
        if product.gst not in [to_decimal(r) for r in GST_RATES]:
            raise ValidationError(f"GST rate must be one of {', '.join(str(r) for r in GST_RATES)}")
        if product.purchase_price < ZERO or product.selling_price < ZERO:
            raise ValidationError("Prices cannot be negative")
        if product.stock < 0 or product.min_stock < 0:
            raise ValidationError("Stock and minimum stock cannot be negative")

    @staticmethod
    def create_product(store, data):
        """
        Create product. name and code must be present.
        id is assigned from the products collection, any id in data is ignored.
        """
        product = Product.from_dict({**data, "id": None})
        ProductService._validate(product)

        product.id = store.next_id(PRODUCTS)
        store.append(PRODUCTS, product.to_dict())
        logger.info("Product %s created (%s)", product.id, product.code)
        return product

    @staticmethod
    def update_product(store, product_id, data):
        existing = ProductService.get_product_by_id(store, product_id)
        merged = {**existing.to_dict(), **data, "id": existing.id}
        product = Product.from_dict(merged)
        ProductService._validate(product)

        store.update(PRODUCTS, product.id, product.to_dict())
        logger.info("Product %s updated", product.id)
        return product

    @staticmethod
    def delete_product(store, product_id):
        # Invoices keep their own snapshot of name/code/rate
        if not store.remove(PRODUCTS, product_id):
            raise NotFoundError(f"Product id {product_id} not found")
        logger.info("Product %s deleted", product_id)

    @staticmethod
    def get_product_by_id(store, product_id):
        data = store.find(PRODUCTS, product_id)
        if not data:
            raise NotFoundError(f"Product id {product_id} not found")
        return Product.from_dict(data)

    @staticmethod
    def list_products(store):
        return [Product.from_dict(p) for p in store.get_all(PRODUCTS)]

    @staticmethod
    def search_products(store, query, limit=None):
        q = (query or "").strip().lower()
        products = ProductService.list_products(store)
        if q:
            products = [
                p for p in products
                if q in p.name.lower() or q in p.code.lower() or q in p.category.lower()
            ]
        return products[:limit] if limit else products

    @staticmethod
    def low_stock_products(store):
        return [p for p in ProductService.list_products(store) if p.is_low_stock]

    @staticmethod
    def decrement_stock(store, product_id, quantity):
        """
        Reduce stock by quantity, floored at 0.
        Returns the updated product, or None when the product no longer exists.
        """
        data = store.find(PRODUCTS, product_id)
        if not data:
            return None
        product = Product.from_dict(data)
        product.stock = max(0, product.stock - to_int(quantity))
        store.update(PRODUCTS, product.id, {"stock": product.stock})
        return product
