"""
Invoice model - a payable amount settled by append-only payments.

Design principles:
- Raw facts only are stored: total, due date, payments
- paid amount, remaining balance and status are derived on every read
- Payments are never edited or removed
- All amounts are Decimal in the base currency, except amount_secondary
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple
from pydantic import BaseModel, Field, ConfigDict, field_validator

from orderledger.models.base import MongoModel, Money, _utcnow, as_utc
from orderledger.models.currency import DualAmount


class PaymentMethod(str, Enum):
    CASH = "cash"
    CREDIT_CARD = "credit_card"
    BANK_TRANSFER = "bank_transfer"
    CHECK = "check"


class PaymentStatus(str, Enum):
    UNPAID = "unpaid"
    PARTIAL = "partial"
    PAID = "paid"
    OVERDUE = "overdue"


class Payment(BaseModel):
    """
    A single settlement event.

    amount_secondary is what was actually exchanged at the time of payment;
    it is kept as given and never re-derived from a later rate.
    """
    model_config = ConfigDict(frozen=True)

    amount: Money = Field(gt=0)
    amount_secondary: Money = Field(ge=0)
    method: PaymentMethod
    paid_at: datetime = Field(default_factory=_utcnow)
    note: Optional[str] = None

    @field_validator("paid_at")
    @classmethod
    def _paid_at_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class Invoice(MongoModel):
    """
    Invariants:
    - paid_amount == sum(p.amount for p in payments)
    - 0 <= paid_amount <= total, so remaining_balance is never negative
    - version increases by one per appended payment
    """
    order_id: Optional[str] = None
    customer_id: str
    total: Money = Field(gt=0)
    due_date: datetime
    payments: Tuple[Payment, ...] = ()
    notes: Optional[str] = None
    version: int = 1

    @field_validator("due_date")
    @classmethod
    def _due_date_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    @property
    def paid_amount(self) -> Decimal:
        return sum((p.amount for p in self.payments), Decimal("0"))

    @property
    def paid_amount_secondary(self) -> Decimal:
        return sum((p.amount_secondary for p in self.payments), Decimal("0"))

    @property
    def remaining_balance(self) -> Decimal:
        return self.total - self.paid_amount

    def payment_status(self) -> PaymentStatus:
        """Amount-state only: unpaid, partial or paid. Dates are ignored."""
        paid = self.paid_amount
        if paid == 0:
            return PaymentStatus.UNPAID
        if paid < self.total:
            return PaymentStatus.PARTIAL
        return PaymentStatus.PAID

    def is_overdue(self, now: Optional[datetime] = None) -> bool:
        now = as_utc(now) if now else _utcnow()
        return self.remaining_balance > 0 and now > self.due_date

    def display_status(self, now: Optional[datetime] = None) -> PaymentStatus:
        """Single status for display: overdue wins over unpaid and partial."""
        if self.is_overdue(now):
            return PaymentStatus.OVERDUE
        return self.payment_status()

    def is_closed(self) -> bool:
        return self.remaining_balance == 0

    def to_document(self) -> dict:
        doc = super().to_document()
        doc["payments"] = [payment.model_dump() for payment in self.payments]
        return doc


class InvoiceSummary(BaseModel):
    """Presentation view of an invoice at a point in time."""
    total: DualAmount
    paid: DualAmount
    remaining: DualAmount
    remaining_balance: Money
    payment_status: PaymentStatus
    is_overdue: bool
    display_status: PaymentStatus
    payment_count: int
