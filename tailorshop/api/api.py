"""
API router
"""
from fastapi import APIRouter

from tailorshop.api.endpoints import orders

api_router = APIRouter()

api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
