class BillingError(Exception):
    pass

class ValidationError(BillingError):
    """Bad input; raised before any state is written."""
    pass

class NotFoundError(BillingError):
    pass

class ConsistencyError(BillingError):
    """A staged multi-record write could not be applied as one unit."""
    pass


def error_response(e):
    """(body, status) for a service exception, used by the route handlers."""
    if isinstance(e, ValidationError):
        return {"error": str(e)}, 400
    if isinstance(e, NotFoundError):
        return {"error": str(e)}, 404
    if isinstance(e, ConsistencyError):
        return {"error": str(e)}, 409
    return {"error": "An internal error occurred. Please try again later."}, 500
