from typing import List, Optional
from fastapi import APIRouter
from orderledger.models.order import OrderStatus
from orderledger.schemas.order import OrderCreate, OrderResponse
from orderledger.services.order_service import OrderService

router = APIRouter()

@router.get("/", response_model=List[OrderResponse])
async def list_orders(customer_id: Optional[str] = None, status: Optional[OrderStatus] = None):
    """List orders, newest first, optionally by customer and status"""
    return await OrderService.list_orders(customer_id, status)

@router.post("/", response_model=OrderResponse)
async def create_order(order_in: OrderCreate):
    """Submit an order from its line items"""
    return await OrderService.submit(order_in)

@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str):
    """Get an order by ID"""
    return await OrderService.get_response(order_id)
