"""
Shared response schemas
"""
from pydantic import BaseModel

class MessageResponse(BaseModel):
    """Plain confirmation message"""
    message: str

class ErrorResponse(BaseModel):
    """Error body produced by HTTPException"""
    detail: str
