"""
Order model and status transitions
"""
import enum
from typing import Dict, FrozenSet

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Numeric
from .base import Base


class OrderStatus(str, enum.Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETE = "Complete"


# Every status an order may move to from a given status. Nothing in the API
# moves an order into IN_PROGRESS; it is only reachable by editing the store.
ORDER_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.COMPLETE}),
    OrderStatus.IN_PROGRESS: frozenset({OrderStatus.COMPLETE}),
    OrderStatus.COMPLETE: frozenset(),
}

OUTSTANDING_STATUSES = (OrderStatus.PENDING, OrderStatus.IN_PROGRESS)


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return target in ORDER_TRANSITIONS.get(current, frozenset())


def statuses_leading_to(target: OrderStatus) -> list:
    """Statuses from which `target` can be entered"""
    return [status for status in OrderStatus if can_transition(status, target)]


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    bill_number = Column(String(64), unique=True, nullable=False, index=True)
    bill_date = Column(Date, nullable=False)
    delivery_date = Column(Date, nullable=False, index=True)
    notes = Column(Text, nullable=False, default="")
    status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value)
    completion_date = Column(DateTime, nullable=True)
    image_path = Column(String(255), nullable=True)
    # Kept for compatibility with the shop's existing table; always defaults
    customer_name = Column(String(100), nullable=False, default="N/A")
    total_amount = Column(Numeric(10, 2), nullable=False, default=0)

    def __repr__(self):
        return f"<Order(id={self.id}, bill_number='{self.bill_number}', status='{self.status}')>"
