"""
Order persistence
"""
from dataclasses import dataclass
from datetime import date, datetime
from typing import List

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
import structlog

from tailorshop.core.exceptions import PersistenceError
from tailorshop.models.order import Order, OrderStatus, OUTSTANDING_STATUSES, statuses_leading_to

logger = structlog.get_logger()

# MySQL ER_DUP_ENTRY and the SQLSTATE used by PostgreSQL drivers
MYSQL_DUPLICATE_ENTRY = 1062
UNIQUE_VIOLATION_SQLSTATE = "23505"


def _is_duplicate_key(error: IntegrityError) -> bool:
    """True when the integrity error is a unique key violation"""
    orig = error.orig
    if getattr(orig, "pgcode", None) == UNIQUE_VIOLATION_SQLSTATE or getattr(orig, "sqlstate", None) == UNIQUE_VIOLATION_SQLSTATE:
        return True
    args = getattr(orig, "args", ())
    if args and args[0] == MYSQL_DUPLICATE_ENTRY:
        return True
    message = str(orig).lower()
    return "unique" in message or "duplicate" in message


@dataclass
class InsertResult:
    inserted: bool


@dataclass
class UpdateResult:
    updated: bool


class OrderRepository:
    """Single-statement reads and writes against the orders table.

    Every statement uses bound parameters. A duplicate bill number is an
    expected outcome reported through the result, not an exception.
    """

    def __init__(self, db: Session):
        self.db = db

    def insert(self, order: Order) -> InsertResult:
        """Persist a new order unless its bill number is taken"""
        self.db.add(order)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if not _is_duplicate_key(e):
                logger.error("Order violates a table constraint", bill_number=order.bill_number, error=str(e.orig))
                raise PersistenceError(f"Failed to insert order {order.bill_number}") from e
            logger.info("Order insert rejected by unique constraint", bill_number=order.bill_number)
            return InsertResult(inserted=False)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to insert order", bill_number=order.bill_number, error=str(e))
            raise PersistenceError(f"Failed to insert order {order.bill_number}") from e

        return InsertResult(inserted=True)

    def complete_if_eligible(self, bill_number: str) -> UpdateResult:
        """Mark the order complete unless it is missing or already complete"""
        eligible = [status.value for status in statuses_leading_to(OrderStatus.COMPLETE)]
        statement = (
            update(Order)
            .where(Order.bill_number == bill_number, Order.status.in_(eligible))
            .values(status=OrderStatus.COMPLETE.value, completion_date=datetime.now())
            .execution_options(synchronize_session=False)
        )

        try:
            result = self.db.execute(statement)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to complete order", bill_number=bill_number, error=str(e))
            raise PersistenceError(f"Failed to complete order {bill_number}") from e

        return UpdateResult(updated=result.rowcount > 0)

    def list_pending(self, start_date: date, end_date: date) -> List[Order]:
        """Outstanding orders due within [start_date, end_date], earliest first"""
        statement = (
            select(Order)
            .where(
                Order.status.in_([status.value for status in OUTSTANDING_STATUSES]),
                Order.delivery_date.between(start_date, end_date),
            )
            .order_by(Order.delivery_date.asc(), Order.bill_number.asc())
        )
        return self._fetch(statement, "pending")

    def list_all(self) -> List[Order]:
        """Every order, highest bill number first"""
        statement = select(Order).order_by(Order.bill_number.desc())
        return self._fetch(statement, "all")

    def _fetch(self, statement, view: str) -> List[Order]:
        try:
            return list(self.db.scalars(statement).all())
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to fetch orders", view=view, error=str(e))
            raise PersistenceError(f"Failed to fetch {view} orders") from e
