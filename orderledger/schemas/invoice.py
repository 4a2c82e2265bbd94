from typing import Optional, List
from pydantic import BaseModel, model_validator
from datetime import datetime
from decimal import Decimal
from orderledger.models.invoice import Invoice, InvoiceSummary, PaymentMethod, PaymentStatus


class InvoiceCreate(BaseModel):
    """Either order_id, or customer_id and total for a standalone invoice."""
    order_id: Optional[str] = None
    customer_id: Optional[str] = None
    total: Optional[Decimal] = None
    due_date: datetime
    notes: Optional[str] = None

    @model_validator(mode="after")
    def _order_or_customer(self) -> "InvoiceCreate":
        if not self.order_id and not self.customer_id:
            raise ValueError("Select an order or a customer")
        if not self.order_id and self.total is None:
            raise ValueError("Standalone invoices need a total")
        return self

class PaymentCreate(BaseModel):
    # Range checks happen in the ledger so the error messages stay the same everywhere
    amount: Decimal
    amount_secondary: Optional[Decimal] = None
    method: PaymentMethod = PaymentMethod.CASH
    note: Optional[str] = None

class PaymentResponse(BaseModel):
    amount: Decimal
    amount_secondary: Decimal
    method: PaymentMethod
    paid_at: datetime
    note: Optional[str] = None

    model_config = {"from_attributes": True}

class InvoiceResponse(BaseModel):
    id: str
    order_id: Optional[str] = None
    customer_id: str
    total: Decimal
    paid_amount: Decimal
    paid_amount_secondary: Decimal
    remaining_balance: Decimal
    due_date: datetime
    notes: Optional[str] = None
    payment_status: PaymentStatus
    is_overdue: bool
    display_status: PaymentStatus
    summary: InvoiceSummary
    payments: List[PaymentResponse]
    version: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_invoice(cls, invoice: Invoice, summary: InvoiceSummary) -> "InvoiceResponse":
        return cls(
            id=str(invoice.id),
            order_id=invoice.order_id,
            customer_id=invoice.customer_id,
            total=invoice.total,
            paid_amount=invoice.paid_amount,
            paid_amount_secondary=invoice.paid_amount_secondary,
            remaining_balance=invoice.remaining_balance,
            due_date=invoice.due_date,
            notes=invoice.notes,
            payment_status=summary.payment_status,
            is_overdue=summary.is_overdue,
            display_status=summary.display_status,
            summary=summary,
            payments=[PaymentResponse.model_validate(p) for p in invoice.payments],
            version=invoice.version,
            created_at=invoice.created_at,
            updated_at=invoice.updated_at,
        )
