"""
In-progress order composition.

One aggregator per composition session, created by its caller and dropped
or cleared once the order is submitted or abandoned. Items are keyed by
product id, so adding the same product twice grows a single row.
"""
from decimal import Decimal
from typing import Dict, List, Optional

from orderledger.models.currency import Currency
from orderledger.models.line_item import LineItem, ProductRef


class LineItemAggregator:
    """Working set of line items for an order being composed."""

    def __init__(self):
        self._items: Dict[str, LineItem] = {}
        self.customer_id: Optional[str] = None
        self.currency: Currency = Currency.USD
        self.notes: str = ""
        self.internal_notes: str = ""

    def add_item(self, product: ProductRef, quantity: int) -> None:
        """Add quantity of product, merging into an existing row. Non-positive quantities are ignored."""
        if quantity <= 0:
            return
        existing = self._items.get(product.product_id)
        if existing:
            self._items[product.product_id] = existing.with_quantity(existing.quantity + quantity)
        else:
            self._items[product.product_id] = LineItem.from_product(product, quantity)

    def remove_item(self, product_id: str) -> None:
        self._items.pop(product_id, None)

    def update_quantity(self, product_id: str, quantity: int) -> None:
        """Replace a row's quantity. Below 1 is a no-op; use remove_item to drop a row."""
        if quantity < 1:
            return
        existing = self._items.get(product_id)
        if existing:
            self._items[product_id] = existing.with_quantity(quantity)

    def get_item(self, product_id: str) -> Optional[LineItem]:
        return self._items.get(product_id)

    def items(self) -> List[LineItem]:
        return [item.model_copy(deep=True) for item in self._items.values()]

    def total(self) -> Decimal:
        return sum((item.subtotal for item in self._items.values()), Decimal("0"))

    def item_count(self) -> int:
        return sum(item.quantity for item in self._items.values())

    def is_empty(self) -> bool:
        return not self._items

    def set_customer(self, customer_id: str) -> None:
        self.customer_id = customer_id

    def set_currency(self, currency: Currency) -> None:
        self.currency = currency

    def set_notes(self, notes: str) -> None:
        self.notes = notes

    def set_internal_notes(self, notes: str) -> None:
        self.internal_notes = notes

    def clear(self) -> None:
        """Drop all items and reset customer, currency and notes to defaults."""
        self._items = {}
        self.customer_id = None
        self.currency = Currency.USD
        self.notes = ""
        self.internal_notes = ""

    def __len__(self) -> int:
        return len(self._items)
