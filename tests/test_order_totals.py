"""Tests for freezing an aggregator into an OrderTotal."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from orderledger.models.currency import Currency
from orderledger.utils.ledger_errors import EmptyOrderError
from orderledger.utils.order_totals import snapshot


def test_snapshot_empty_aggregator_raises(aggregator):
    with pytest.raises(EmptyOrderError) as exc:
        snapshot(aggregator)
    assert exc.value.message == "Add at least one item to the order"


def test_snapshot_after_removing_everything_raises(aggregator, widget):
    aggregator.add_item(widget, 1)
    aggregator.remove_item("P1")
    with pytest.raises(EmptyOrderError):
        snapshot(aggregator)


def test_snapshot_total_matches_aggregator(aggregator, widget, gadget):
    aggregator.add_item(widget, 2)
    aggregator.add_item(gadget, 3)

    order = snapshot(aggregator, Currency.USD, "rush")

    assert order.total == aggregator.total() == Decimal("79.97")
    assert order.total == sum(item.subtotal for item in order.items)
    assert order.item_count() == 5
    assert order.note == "rush"


def test_snapshot_is_not_affected_by_later_changes(aggregator, widget, gadget):
    aggregator.add_item(widget, 2)
    order = snapshot(aggregator)

    aggregator.add_item(widget, 10)
    aggregator.add_item(gadget, 1)
    aggregator.update_quantity("P1", 50)
    aggregator.clear()

    assert len(order.items) == 1
    assert order.items[0].quantity == 2
    assert order.total == Decimal("20.00")


def test_snapshot_is_frozen(aggregator, widget):
    aggregator.add_item(widget, 1)
    order = snapshot(aggregator)

    with pytest.raises(ValidationError):
        order.total = Decimal("0")
    with pytest.raises(ValidationError):
        order.items[0].quantity = 3


def test_snapshot_defaults_to_aggregator_selection(aggregator, widget):
    aggregator.add_item(widget, 1)
    aggregator.set_customer("cust-7")
    aggregator.set_currency(Currency.LBP)
    aggregator.set_notes("leave at door")
    aggregator.set_internal_notes("vip")

    order = snapshot(aggregator)

    assert order.currency == Currency.LBP
    assert order.note == "leave at door"
    assert order.internal_note == "vip"
    assert order.customer_id == "cust-7"


def test_snapshot_explicit_selection_wins(aggregator, widget):
    aggregator.add_item(widget, 1)
    aggregator.set_currency(Currency.LBP)
    aggregator.set_notes("aggregator note")

    order = snapshot(aggregator, Currency.USD, "explicit note")

    assert order.currency == Currency.USD
    assert order.note == "explicit note"


def test_snapshot_currency_does_not_change_amounts(aggregator, widget):
    aggregator.add_item(widget, 3)
    usd = snapshot(aggregator, Currency.USD)
    lbp = snapshot(aggregator, Currency.LBP)
    assert usd.total == lbp.total == Decimal("30.00")
