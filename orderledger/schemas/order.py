from typing import Optional, List
from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
from orderledger.models.currency import Currency, DualAmount
from orderledger.models.order import Order, OrderStatus


class OrderLineIn(BaseModel):
    product_id: str
    product_name: str
    product_sku: str = ""
    quantity: int
    unit_price: Decimal = Field(ge=0)

    model_config = {"from_attributes": True}

class OrderCreate(BaseModel):
    customer_id: str
    items: List[OrderLineIn] = []
    currency: Currency = Currency.USD
    notes: Optional[str] = None
    internal_notes: Optional[str] = None

class OrderLineResponse(BaseModel):
    product_id: str
    product_name: str
    product_sku: str
    quantity: int
    unit_price: Decimal
    subtotal: Decimal

    model_config = {"from_attributes": True}

class OrderResponse(BaseModel):
    id: str
    customer_id: Optional[str]
    status: OrderStatus
    items: List[OrderLineResponse]
    item_count: int
    total: Decimal
    total_display: DualAmount
    currency: Currency
    note: Optional[str] = None
    invoice_id: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_order(cls, order: Order, total_display: DualAmount) -> "OrderResponse":
        return cls(
            id=str(order.id),
            customer_id=order.customer_id,
            status=order.status,
            items=[OrderLineResponse.model_validate(item) for item in order.items],
            item_count=sum(item.quantity for item in order.items),
            total=order.total,
            total_display=total_display,
            currency=order.currency,
            note=order.note,
            invoice_id=order.invoice_id,
            created_at=order.created_at,
        )
