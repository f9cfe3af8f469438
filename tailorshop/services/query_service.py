"""
Order listings
"""
from datetime import date
from typing import List, Optional

from tailorshop.core.config import settings
from tailorshop.schemas.order import OrderHistoryResponse, PendingOrderResponse
from tailorshop.services.order_repository import OrderRepository


class OrderQueryService:
    """Turns optional filters into repository reads and response shapes.

    A missing bound on the pending range falls back to a fixed date, so
    orders due outside [range_start, range_end] never show up unfiltered.
    """

    def __init__(
        self,
        repository: OrderRepository,
        range_start: Optional[date] = None,
        range_end: Optional[date] = None,
    ):
        self.repository = repository
        self.range_start = range_start or settings.PENDING_RANGE_START
        self.range_end = range_end or settings.PENDING_RANGE_END

    def list_pending(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> List[PendingOrderResponse]:
        orders = self.repository.list_pending(
            start_date or self.range_start,
            end_date or self.range_end,
        )
        return [PendingOrderResponse.model_validate(order) for order in orders]

    def list_all_orders(self) -> List[OrderHistoryResponse]:
        return [OrderHistoryResponse.model_validate(order) for order in self.repository.list_all()]
