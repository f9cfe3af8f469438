"""
Order API endpoints
"""
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from starlette.concurrency import run_in_threadpool
import structlog

from tailorshop.api.deps import get_order_service, get_query_service
from tailorshop.core.exceptions import (
    ConflictError,
    NotFoundOrAlreadyComplete,
    PersistenceError,
    StorageWriteError,
    ValidationError,
)
from tailorshop.schemas.common import ErrorResponse, MessageResponse
from tailorshop.schemas.order import OrderCreatedResponse, OrderHistoryResponse, PendingOrderResponse
from tailorshop.services.artifact_store import ImageUpload
from tailorshop.services.order_service import OrderService
from tailorshop.services.query_service import OrderQueryService

logger = structlog.get_logger()

router = APIRouter()


def _parse_date_param(value: Optional[str], name: str) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"{name} must be a YYYY-MM-DD date")


@router.post(
    "",
    status_code=201,
    response_model=OrderCreatedResponse,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create_order(
    bill_number: Optional[str] = Form(None, description="Bill number"),
    delivery_date: Optional[str] = Form(None, description="Delivery date (YYYY-MM-DD)"),
    notes: Optional[str] = Form(None, description="Notes"),
    style_image: Optional[UploadFile] = File(None, description="Style reference image"),
    order_service: OrderService = Depends(get_order_service),
):
    """Create an order, optionally with a style image"""
    logger.info("Create order request", bill_number=bill_number, delivery_date=delivery_date)

    try:
        image = None
        if style_image is not None and style_image.filename:
            image = ImageUpload(filename=style_image.filename, content=await style_image.read())

        created = await run_in_threadpool(order_service.create_order, bill_number, delivery_date, notes, image)
        return OrderCreatedResponse(bill_number=created)

    except ValidationError as e:
        logger.info("Order rejected", bill_number=bill_number, reason=str(e))
        raise HTTPException(status_code=400, detail=str(e))
    except ConflictError as e:
        logger.info("Duplicate bill number", bill_number=bill_number)
        raise HTTPException(status_code=409, detail=str(e))
    except (StorageWriteError, PersistenceError) as e:
        logger.error("Failed to create order", bill_number=bill_number, error=str(e), cause=str(e.__cause__))
        raise HTTPException(status_code=500, detail="Failed to create order.")
    except Exception as e:
        logger.error("Unexpected error creating order", bill_number=bill_number, error=str(e))
        raise HTTPException(status_code=500, detail="Failed to create order.")
    finally:
        if style_image is not None:
            await style_image.close()


@router.put("/{bill_number}/complete", response_model=MessageResponse, responses={404: {"model": ErrorResponse}})
def complete_order(
    bill_number: str,
    order_service: OrderService = Depends(get_order_service),
):
    """Mark an order as complete"""
    logger.info("Complete order request", bill_number=bill_number)

    try:
        order_service.complete_order(bill_number)
        return MessageResponse(message=f"Bill {bill_number} marked as Complete and ready for pickup.")

    except NotFoundOrAlreadyComplete:
        raise HTTPException(status_code=404, detail="Order not found or status not updated.")
    except Exception as e:
        logger.error("Failed to complete order", bill_number=bill_number, error=str(e))
        raise HTTPException(status_code=500, detail="Failed to update order status.")


@router.get("/pending", response_model=List[PendingOrderResponse])
def list_pending_orders(
    start_date: Optional[str] = Query(None, description="Earliest delivery date (YYYY-MM-DD)"),
    end_date: Optional[str] = Query(None, description="Latest delivery date (YYYY-MM-DD)"),
    query_service: OrderQueryService = Depends(get_query_service),
):
    """Pending and in-progress orders, earliest delivery first"""
    start = _parse_date_param(start_date, "start_date")
    end = _parse_date_param(end_date, "end_date")
    logger.info("List pending orders request", start_date=start_date, end_date=end_date)

    try:
        return query_service.list_pending(start, end)
    except Exception as e:
        logger.error("Failed to fetch pending orders", error=str(e))
        raise HTTPException(status_code=500, detail="Error fetching pending orders.")


@router.get("", response_model=List[OrderHistoryResponse])
def list_all_orders(query_service: OrderQueryService = Depends(get_query_service)):
    """Every order, latest bill number first"""
    logger.info("List all orders request")

    try:
        return query_service.list_all_orders()
    except Exception as e:
        logger.error("Failed to fetch all orders", error=str(e))
        raise HTTPException(status_code=500, detail="Error fetching all orders.")
