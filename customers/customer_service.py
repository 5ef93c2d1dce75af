from customers.customer import Customer, CUSTOMER_TYPES
from store.record_store import CUSTOMERS
from src.exceptions import ValidationError, NotFoundError
from src.logger import get_logger

logger = get_logger("CustomerService")

class CustomerService:
    @staticmethod
    def _validate(customer):
        if not customer.name or not customer.mobile:
            raise ValidationError("Name and Mobile required")
        if customer.type not in CUSTOMER_TYPES:
            raise ValidationError(f"Customer type must be one of {', '.join(CUSTOMER_TYPES)}")

    @staticmethod
    def create_customer(store, data):
        customer = Customer.from_dict({**data, "id": None})
        CustomerService._validate(customer)

        customer.id = store.next_id(CUSTOMERS)
        store.append(CUSTOMERS, customer.to_dict())
        logger.info("Customer %s created", customer.id)
        return customer

    @staticmethod
    def update_customer(store, customer_id, data):
        existing = CustomerService.get_customer_by_id(store, customer_id)
        customer = Customer.from_dict({**existing.to_dict(), **data, "id": existing.id})
        CustomerService._validate(customer)

        store.update(CUSTOMERS, customer.id, customer.to_dict())
        logger.info("Customer %s updated", customer.id)
        return customer

    @staticmethod
    def delete_customer(store, customer_id):
        if not store.remove(CUSTOMERS, customer_id):
            raise NotFoundError(f"Customer id {customer_id} not found")
        logger.info("Customer %s deleted", customer_id)

    @staticmethod
    def get_customer_by_id(store, customer_id):
        data = store.find(CUSTOMERS, customer_id)
        if not data:
            raise NotFoundError(f"Customer id {customer_id} not found")
        return Customer.from_dict(data)

    @staticmethod
    def list_customers(store):
        return [Customer.from_dict(c) for c in store.get_all(CUSTOMERS)]

    @staticmethod
    def search_customers(store, query, limit=None):
        q = (query or "").strip().lower()
        customers = CustomerService.list_customers(store)
        if q:
            customers = [c for c in customers if q in c.name.lower() or q in c.mobile]
        return customers[:limit] if limit else customers
