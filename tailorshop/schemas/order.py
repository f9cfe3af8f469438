"""
Order response schemas
"""
from typing import Optional
from datetime import date, datetime
from pydantic import BaseModel, Field

class PendingOrderResponse(BaseModel):
    """Outstanding order as shown in the work queue"""
    bill_number: str = Field(..., description="Bill number")
    delivery_date: date = Field(..., description="Promised delivery date")
    notes: str = Field("", description="Free text notes")
    status: str = Field(..., description="Order status")
    image_path: Optional[str] = Field(None, description="Stored style image name")

    class Config:
        from_attributes = True

class OrderHistoryResponse(PendingOrderResponse):
    """Any order, including when it was completed"""
    completion_date: Optional[datetime] = Field(None, description="When the order was completed")

class OrderCreatedResponse(BaseModel):
    message: str = "Order created successfully."
    bill_number: str = Field(..., description="Bill number of the new order")
