"""
Invoice payment ledger.

Rules:
- Payments are strictly positive and appended, never edited
- The sum of payments never exceeds the invoice total
- Status is derived from (remaining balance, due date, now) on every read

record_payment validates against the invoice it is given. Under concurrent
writers the persistence layer must re-run it against the durably stored
payments at commit time (see InvoiceRepository.append_payment).
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional

import structlog

from orderledger.models.base import _utcnow, as_utc
from orderledger.models.invoice import Invoice, InvoiceSummary, Payment, PaymentMethod
from orderledger.models.order import OrderTotal
from orderledger.utils.currency import (
    DEFAULT_SECONDARY_CURRENCY,
    Number,
    format_dual,
    resolve_rate,
    suggest_secondary_amount,
    to_decimal,
)
from orderledger.utils.ledger_errors import InvalidAmountError, OverpaymentError

logger = structlog.get_logger(__name__)


def _positive_amount(amount: Number) -> Decimal:
    try:
        value = to_decimal(amount)
    except ArithmeticError:
        raise InvalidAmountError()
    if not value.is_finite() or value <= 0:
        raise InvalidAmountError()
    return value


def create_invoice(
    customer_id: str,
    total: Number,
    due_date: datetime,
    order_id: Optional[str] = None,
    notes: Optional[str] = None,
) -> Invoice:
    """Standalone invoice with an empty payment sequence."""
    return Invoice(
        customer_id=customer_id,
        order_id=order_id,
        total=_positive_amount(total),
        due_date=due_date,
        notes=notes,
    )


def create_invoice_from_order(
    order: OrderTotal,
    due_date: datetime,
    customer_id: Optional[str] = None,
    order_id: Optional[str] = None,
    notes: Optional[str] = None,
) -> Invoice:
    """Invoice for an order snapshot; the total is copied, not referenced."""
    customer = customer_id or order.customer_id
    if not customer:
        raise ValueError("Invoice requires a customer")
    return create_invoice(customer, order.total, due_date, order_id=order_id, notes=notes)


def record_payment(
    invoice: Invoice,
    amount: Number,
    method: PaymentMethod,
    note: Optional[str] = None,
    amount_secondary: Optional[Number] = None,
    rate: Optional[Number] = None,
    now: Optional[datetime] = None,
) -> Invoice:
    """
    Return a copy of invoice with one more payment. The input is not modified.

    amount_secondary is stored as given; when omitted it is suggested from
    rate (or the default rate).

    Raises:
        InvalidAmountError: amount <= 0, or amount_secondary < 0
        OverpaymentError: amount > invoice.remaining_balance
    """
    value = _positive_amount(amount)

    remaining = invoice.remaining_balance
    if value > remaining:
        logger.info(
            "payment_rejected",
            invoice_id=str(invoice.id),
            amount=str(value),
            remaining=str(remaining),
        )
        raise OverpaymentError(remaining)

    if amount_secondary is None:
        secondary = suggest_secondary_amount(value, resolve_rate(rate))
    else:
        try:
            secondary = to_decimal(amount_secondary)
        except ArithmeticError:
            raise InvalidAmountError()
        if not secondary.is_finite() or secondary < 0:
            raise InvalidAmountError()

    paid_at = as_utc(now) if now else _utcnow()
    payment = Payment(
        amount=value,
        amount_secondary=secondary,
        method=method,
        paid_at=paid_at,
        note=note,
    )

    return invoice.model_copy(update={
        "payments": (*invoice.payments, payment),
        "version": invoice.version + 1,
        "updated_at": paid_at,
    })


def invoice_summary(
    invoice: Invoice,
    rate: Number,
    now: Optional[datetime] = None,
    currency_code: str = DEFAULT_SECONDARY_CURRENCY,
) -> InvoiceSummary:
    remaining = invoice.remaining_balance
    return InvoiceSummary(
        total=format_dual(invoice.total, rate, currency_code),
        paid=format_dual(invoice.paid_amount, rate, currency_code),
        remaining=format_dual(remaining, rate, currency_code),
        remaining_balance=remaining,
        payment_status=invoice.payment_status(),
        is_overdue=invoice.is_overdue(now),
        display_status=invoice.display_status(now),
        payment_count=len(invoice.payments),
    )
