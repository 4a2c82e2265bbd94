from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from orderledger.main import app
from orderledger.models.line_item import ProductRef
from orderledger.utils.line_items import LineItemAggregator
from orderledger.utils.payment_ledger import create_invoice


def make_collection() -> MagicMock:
    """Motor collection double: awaitable CRUD methods, sync find() cursor."""
    collection = MagicMock()
    collection.insert_one = AsyncMock(return_value=MagicMock(inserted_id=None))
    collection.find_one = AsyncMock(return_value=None)
    collection.update_one = AsyncMock(return_value=MagicMock(modified_count=1))

    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.to_list = AsyncMock(return_value=[])
    collection.find.return_value = cursor
    return collection


@pytest.fixture
def mock_db():
    """Fake motor database with orders, invoices and tenants collections."""
    collections = {
        "orders": make_collection(),
        "invoices": make_collection(),
        "tenants": make_collection(),
    }
    db = MagicMock()
    db.__getitem__.side_effect = collections.__getitem__
    return db


@pytest.fixture
def client():
    """Test client without lifespan, so no MongoDB connection is opened."""
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def now():
    return datetime.now(timezone.utc)


@pytest.fixture
def widget():
    return ProductRef(product_id="P1", product_name="Widget", product_sku="WID-001", unit_price=Decimal("10.00"))


@pytest.fixture
def gadget():
    return ProductRef(product_id="P2", product_name="Gadget", product_sku="GAD-002", unit_price=Decimal("19.99"))


@pytest.fixture
def aggregator():
    return LineItemAggregator()


@pytest.fixture
def overdue_invoice(now):
    """Total 250.00, due yesterday, no payments."""
    return create_invoice("cust-1", Decimal("250.00"), now - timedelta(days=1))


@pytest.fixture
def open_invoice(now):
    """Total 250.00, due in thirty days, no payments."""
    return create_invoice("cust-1", Decimal("250.00"), now + timedelta(days=30))
