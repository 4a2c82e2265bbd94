"""Freezing an aggregator into an OrderTotal for submission."""
from decimal import Decimal
from typing import Optional

from orderledger.models.currency import Currency
from orderledger.models.order import OrderTotal
from orderledger.utils.ledger_errors import EmptyOrderError
from orderledger.utils.line_items import LineItemAggregator


def snapshot(
    aggregator: LineItemAggregator,
    currency: Optional[Currency] = None,
    note: Optional[str] = None,
) -> OrderTotal:
    """
    Copy the aggregator's items into an immutable OrderTotal.

    The total is summed from the copies themselves, so it always matches
    the snapshot's own items. currency and note default to the
    aggregator's selection.

    Raises EmptyOrderError if the aggregator holds no items.
    """
    if aggregator.is_empty():
        raise EmptyOrderError()

    items = tuple(aggregator.items())
    total = sum((item.subtotal for item in items), Decimal("0"))

    return OrderTotal(
        items=items,
        total=total,
        currency=currency or aggregator.currency,
        note=note if note is not None else (aggregator.notes or None),
        internal_note=aggregator.internal_notes or None,
        customer_id=aggregator.customer_id,
    )
