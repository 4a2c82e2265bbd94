from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, patch

from orderledger.models.currency import DualAmount
from orderledger.models.invoice import PaymentStatus
from orderledger.models.order import OrderStatus
from orderledger.schemas.currency import ConversionResponse
from orderledger.schemas.invoice import InvoiceResponse
from orderledger.schemas.order import OrderResponse, OrderLineResponse
from orderledger.services.invoice_service import InvoiceService
from orderledger.services.order_service import OrderService
from orderledger.utils.ledger_errors import (
    ConcurrentPaymentError,
    EmptyOrderError,
    InvalidAmountError,
    OverpaymentError,
)
from orderledger.utils.payment_ledger import invoice_summary


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200


def test_create_order(client):
    mock_order = OrderResponse(
        id="507f1f77bcf86cd799439012",
        customer_id="cust-1",
        status="confirmed",
        items=[
            OrderLineResponse(
                product_id="P1",
                product_name="Widget",
                product_sku="WID-001",
                quantity=5,
                unit_price=Decimal("10.00"),
                subtotal=Decimal("50.00"),
            )
        ],
        item_count=5,
        total=Decimal("50.00"),
        total_display=DualAmount(base="$50.00", secondary="4,400,000 LBP"),
        currency="USD",
        created_at=datetime.now(timezone.utc),
    )

    with patch("orderledger.services.order_service.OrderService.submit", new_callable=AsyncMock) as mock_submit:
        mock_submit.return_value = mock_order

        response = client.post(
            "/api/v1/orders/",
            json={
                "customer_id": "cust-1",
                "items": [{"product_id": "P1", "product_name": "Widget", "quantity": 5, "unit_price": "10.00"}],
            },
        )

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == "507f1f77bcf86cd799439012"
    assert Decimal(data["total"]) == Decimal("50.00")
    assert data["total_display"]["secondary"] == "4,400,000 LBP"
    mock_submit.assert_called_once()


def test_create_order_empty_returns_message(client):
    with patch("orderledger.services.order_service.OrderService.submit", new_callable=AsyncMock) as mock_submit:
        mock_submit.side_effect = EmptyOrderError()
        response = client.post("/api/v1/orders/", json={"customer_id": "cust-1", "items": []})

    assert response.status_code == 400
    assert response.json()["detail"] == "Add at least one item to the order"
    assert response.json()["error"] == "EmptyOrderError"


def test_get_invoice(client, overdue_invoice, now):
    mock_response = InvoiceResponse.from_invoice(
        overdue_invoice, invoice_summary(overdue_invoice, Decimal("88000"), now)
    )
    with patch("orderledger.services.invoice_service.InvoiceService.get", new_callable=AsyncMock) as mock_get:
        mock_get.return_value = mock_response
        response = client.get(f"/api/v1/invoices/{overdue_invoice.id}")

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == str(overdue_invoice.id)
    assert data["display_status"] == "overdue"
    assert data["payment_status"] == "unpaid"
    assert data["is_overdue"] is True
    assert Decimal(data["remaining_balance"]) == Decimal("250.00")
    assert data["summary"]["total"]["secondary"] == "22,000,000 LBP"


def test_record_payment_overpayment_maps_to_400(client):
    with patch.object(InvoiceService, "record_payment", new_callable=AsyncMock) as mock_record:
        mock_record.side_effect = OverpaymentError(Decimal("150.00"))
        response = client.post(
            "/api/v1/invoices/507f1f77bcf86cd799439012/payments",
            json={"amount": "200", "method": "cash"},
        )

    assert response.status_code == 400
    body = response.json()
    assert body["detail"] == "Amount exceeds remaining balance of $150.00"
    assert body["remaining"] == "150.00"


def test_record_payment_invalid_amount_maps_to_400(client):
    with patch.object(InvoiceService, "record_payment", new_callable=AsyncMock) as mock_record:
        mock_record.side_effect = InvalidAmountError()
        response = client.post(
            "/api/v1/invoices/507f1f77bcf86cd799439012/payments",
            json={"amount": "-1", "method": "cash"},
        )

    assert response.status_code == 400
    assert response.json()["detail"] == "Enter a positive amount"


def test_record_payment_conflict_maps_to_409(client):
    with patch.object(InvoiceService, "record_payment", new_callable=AsyncMock) as mock_record:
        mock_record.side_effect = ConcurrentPaymentError()
        response = client.post(
            "/api/v1/invoices/507f1f77bcf86cd799439012/payments",
            json={"amount": "10", "method": "check"},
        )

    assert response.status_code == 409


def test_record_payment_unknown_method_is_422(client):
    response = client.post(
        "/api/v1/invoices/507f1f77bcf86cd799439012/payments",
        json={"amount": "10", "method": "barter"},
    )
    assert response.status_code == 422


def test_create_invoice_requires_order_or_customer(client):
    response = client.post("/api/v1/invoices/", json={"due_date": "2030-01-01T00:00:00Z"})
    assert response.status_code == 422


def test_convert(client):
    mock_result = ConversionResponse(
        amount=Decimal("100"),
        converted=Decimal("8800000"),
        exchange_rate=Decimal("88000"),
        display=DualAmount(base="$100.00", secondary="8,800,000 LBP"),
    )
    with patch("orderledger.services.currency_service.CurrencyService.convert", new_callable=AsyncMock) as mock_convert:
        mock_convert.return_value = mock_result
        response = client.get("/api/v1/currency/convert", params={"amount": "100"})

    assert response.status_code == 200
    assert response.json()["display"]["base"] == "$100.00"
    mock_convert.assert_called_once_with(Decimal("100"))


def test_list_invoices_by_status(client, overdue_invoice, now):
    mock_response = InvoiceResponse.from_invoice(
        overdue_invoice, invoice_summary(overdue_invoice, Decimal("88000"), now)
    )
    with patch.object(InvoiceService, "list_invoices", new_callable=AsyncMock) as mock_list:
        mock_list.return_value = [mock_response]
        response = client.get("/api/v1/invoices/", params={"customer_id": "cust-1", "status": "overdue"})

    assert response.status_code == 200
    assert [i["display_status"] for i in response.json()] == ["overdue"]
    mock_list.assert_called_once_with("cust-1", PaymentStatus.OVERDUE)


def test_list_invoices_unknown_status_is_422(client):
    response = client.get("/api/v1/invoices/", params={"status": "lost"})
    assert response.status_code == 422


def test_list_orders_by_status(client):
    with patch.object(OrderService, "list_orders", new_callable=AsyncMock) as mock_list:
        mock_list.return_value = []
        response = client.get("/api/v1/orders/", params={"status": "invoiced"})

    assert response.status_code == 200
    assert response.json() == []
    mock_list.assert_called_once_with(None, OrderStatus.INVOICED)


def test_create_invoice_with_notes(client, open_invoice, now):
    invoice = open_invoice.model_copy(update={"notes": "net 30"})
    mock_response = InvoiceResponse.from_invoice(invoice, invoice_summary(invoice, Decimal("88000"), now))
    with patch.object(InvoiceService, "create", new_callable=AsyncMock) as mock_create:
        mock_create.return_value = mock_response
        response = client.post(
            "/api/v1/invoices/",
            json={"customer_id": "cust-1", "total": "250", "due_date": "2030-01-01T00:00:00Z", "notes": "net 30"},
        )

    assert response.status_code == 200
    assert response.json()["notes"] == "net 30"
    assert mock_create.call_args[0][0].notes == "net 30"
