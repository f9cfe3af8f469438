# SQLAlchemy models
from .base import Base
from .order import Order, OrderStatus, ORDER_TRANSITIONS, OUTSTANDING_STATUSES, can_transition, statuses_leading_to

__all__ = [
    "Base", "Order", "OrderStatus", "ORDER_TRANSITIONS", "OUTSTANDING_STATUSES",
    "can_transition", "statuses_leading_to"
]
