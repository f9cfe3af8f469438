"""
Order domain exceptions.

Raised by the services when an order operation cannot complete. The API
layer catches these and translates them into HTTP responses.
"""


class OrderError(Exception):
    """Base class for order lifecycle failures."""


class ValidationError(OrderError):
    """A required field is missing or malformed."""


class ConflictError(OrderError):
    """An order with the same bill number already exists."""


class StorageWriteError(OrderError):
    """The style image could not be written to the artifact store."""


class PersistenceError(OrderError):
    """The order store is unreachable or rejected the statement."""


class NotFoundOrAlreadyComplete(OrderError):
    """The order does not exist or is already complete."""
