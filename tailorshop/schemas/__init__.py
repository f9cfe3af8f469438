# Pydantic schemas
from .order import PendingOrderResponse, OrderHistoryResponse, OrderCreatedResponse
from .common import MessageResponse, ErrorResponse

__all__ = [
    "PendingOrderResponse", "OrderHistoryResponse", "OrderCreatedResponse",
    "MessageResponse", "ErrorResponse"
]
