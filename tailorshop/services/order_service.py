"""
Order lifecycle: creation with an optional style image, and completion
"""
from datetime import date
from typing import Optional

import structlog

from tailorshop.core.exceptions import (
    ConflictError,
    NotFoundOrAlreadyComplete,
    ValidationError,
)
from tailorshop.models.order import Order, OrderStatus
from tailorshop.services.artifact_store import ArtifactStore, ImageUpload
from tailorshop.services.order_repository import OrderRepository

logger = structlog.get_logger()


def _parse_delivery_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise ValidationError(f"Delivery date '{value}' is not a valid YYYY-MM-DD date.") from e


class OrderService:
    """Creates and completes orders.

    The style image and the order row live in different stores, so creation
    writes the image first and deletes it again on every path where the row
    is not written.
    """

    def __init__(self, repository: OrderRepository, artifact_store: ArtifactStore):
        self.repository = repository
        self.artifact_store = artifact_store

    def create_order(
        self,
        bill_number: Optional[str],
        delivery_date: Optional[str],
        notes: Optional[str] = None,
        image: Optional[ImageUpload] = None,
    ) -> str:
        """Create a pending order and return its bill number"""
        bill_number = (bill_number or "").strip()
        delivery_value = (delivery_date or "").strip()

        if not bill_number or not delivery_value:
            raise ValidationError("Bill number and delivery date are required.")
        parsed_delivery_date = _parse_delivery_date(delivery_value)

        image_path = None
        if image is not None:
            image_path = self.artifact_store.store(bill_number, image.content, image.extension)

        order = Order(
            bill_number=bill_number,
            bill_date=date.today(),
            delivery_date=parsed_delivery_date,
            notes=notes or "",
            status=OrderStatus.PENDING.value,
            customer_name="N/A",
            total_amount=0,
            image_path=image_path,
        )

        try:
            result = self.repository.insert(order)
        except Exception:
            # PersistenceError or anything unexpected: the row was not written
            self.artifact_store.delete(image_path)
            raise

        if not result.inserted:
            self.artifact_store.delete(image_path)
            raise ConflictError(f"Bill number {bill_number} already exists. Please use a unique number.")

        logger.info("Order created", bill_number=bill_number, image_path=image_path)
        return bill_number

    def complete_order(self, bill_number: str) -> str:
        """Move an outstanding order to Complete"""
        result = self.repository.complete_if_eligible(bill_number)
        if not result.updated:
            raise NotFoundOrAlreadyComplete(f"Order {bill_number} not found or status not updated.")

        logger.info("Order completed", bill_number=bill_number)
        return bill_number
