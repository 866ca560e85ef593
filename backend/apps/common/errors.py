"""Domain errors raised by the store's services and pure rules.

Each error carries a machine-readable ``code`` and the HTTP status the API
layer renders it with, so services stay free of any DRF imports.
"""
from typing import Any, Dict, List, Optional


class DomainError(Exception):
    code = "DOMAIN_ERROR"
    status_code = 400
    default_message = "Request could not be completed"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        details: Optional[Dict[str, Any]] = None,
        hint: Optional[str] = None,
    ):
        self.message = message or self.default_message
        self.details = details
        self.hint = hint
        super().__init__(self.message)


class OutOfStockError(DomainError):
    code = "OUT_OF_STOCK"
    status_code = 409
    default_message = "Out of stock"

    def __init__(self, product_id: Any, message: Optional[str] = None):
        self.product_id = product_id
        super().__init__(message, details={"productId": str(product_id)})


class EmptyCartError(DomainError):
    code = "EMPTY_CART"
    status_code = 400
    default_message = "Cart is empty"


class InsufficientStockError(DomainError):
    """Checkout demand exceeds current stock for at least one line.

    ``product_id``/``title``/``requested``/``available`` describe the first
    offending line; ``shortages`` lists every one of them.
    """

    code = "INSUFFICIENT_STOCK"
    status_code = 409

    def __init__(self, shortages: List[Dict[str, Any]]):
        if not shortages:
            raise ValueError("InsufficientStockError requires at least one shortage")
        first = shortages[0]
        self.product_id = first["id"]
        self.title = first["title"]
        self.requested = first["requested"]
        self.available = first["available"]
        self.shortages = shortages
        super().__init__(
            f"Not enough inventory for {self.title}",
            details={"product": dict(first), "shortages": [dict(s) for s in shortages]},
        )


class UnauthorizedError(DomainError):
    code = "FORBIDDEN"
    status_code = 403
    default_message = "Admins only"


class NotFoundError(DomainError):
    code = "NOT_FOUND"
    status_code = 404
    default_message = "Resource not found"


class InvalidInputError(DomainError):
    code = "VALIDATION_ERROR"
    status_code = 400
    default_message = "Validation failed"


class PersistenceError(DomainError):
    """A store failed to read or write.

    ``pending`` holds the in-memory state produced before the failed save, if
    any, so the caller can keep showing it.
    """

    code = "SERVICE_UNAVAILABLE"
    status_code = 503
    default_message = "Storage is temporarily unavailable"

    def __init__(self, message: Optional[str] = None, *, operation: Optional[str] = None):
        self.operation = operation
        self.pending: Any = None
        super().__init__(
            message,
            details={"operation": operation} if operation else None,
            hint="Changes may not be saved. Retry the request.",
        )


__all__ = [
    "DomainError",
    "OutOfStockError",
    "EmptyCartError",
    "InsufficientStockError",
    "UnauthorizedError",
    "NotFoundError",
    "InvalidInputError",
    "PersistenceError",
]
