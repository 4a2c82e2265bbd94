"""
Order models.

OrderTotal is the frozen snapshot taken when an order is submitted.
Order is the persisted document wrapping that snapshot.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict

from orderledger.models.base import MongoModel, Money
from orderledger.models.currency import Currency
from orderledger.models.line_item import LineItem


class OrderStatus(str, Enum):
    DRAFT = "draft"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    INVOICED = "invoiced"
    CANCELLED = "cancelled"


class OrderTotal(BaseModel):
    """
    Immutable order snapshot.

    Invariants:
    - total == sum(item.subtotal for item in items)
    - items are copies, never shared with the aggregator they came from
    """
    model_config = ConfigDict(frozen=True)

    items: Tuple[LineItem, ...]
    total: Money
    currency: Currency = Currency.USD  # Informational only
    note: Optional[str] = None
    internal_note: Optional[str] = None
    customer_id: Optional[str] = None

    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)


class Order(MongoModel):
    customer_id: Optional[str] = None
    status: OrderStatus = OrderStatus.CONFIRMED
    items: Tuple[LineItem, ...]
    total: Money
    currency: Currency = Currency.USD
    note: Optional[str] = None
    internal_note: Optional[str] = None
    invoice_id: Optional[str] = None

    @classmethod
    def from_snapshot(cls, snapshot: OrderTotal) -> "Order":
        return cls(
            customer_id=snapshot.customer_id,
            items=snapshot.items,
            total=snapshot.total,
            currency=snapshot.currency,
            note=snapshot.note,
            internal_note=snapshot.internal_note,
        )

    def to_snapshot(self) -> OrderTotal:
        return OrderTotal(
            items=self.items,
            total=sum((item.subtotal for item in self.items), Decimal("0")),
            currency=self.currency,
            note=self.note,
            internal_note=self.internal_note,
            customer_id=self.customer_id,
        )

    def to_document(self) -> dict:
        doc = super().to_document()
        # Tuples are not BSON; subtotal is derived and not stored
        doc["items"] = [item.model_dump(exclude={"subtotal"}) for item in self.items]
        return doc
