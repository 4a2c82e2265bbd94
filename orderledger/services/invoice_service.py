from datetime import datetime, timezone
from typing import List, Optional
import structlog
from fastapi import HTTPException
from pymongo.errors import DuplicateKeyError

from orderledger.core.config import settings
from orderledger.db.session import get_database
from orderledger.models.currency import CurrencyConfig
from orderledger.models.invoice import Invoice, PaymentStatus
from orderledger.models.order import OrderStatus
from orderledger.repositories.invoice_repo import InvoiceRepository
from orderledger.repositories.order_repo import OrderRepository
from orderledger.schemas.invoice import InvoiceCreate, InvoiceResponse, PaymentCreate
from orderledger.services.currency_service import CurrencyService
from orderledger.utils.payment_ledger import (
    create_invoice,
    create_invoice_from_order,
    invoice_summary,
    record_payment,
)

logger = structlog.get_logger(__name__)


class InvoiceService:
    @staticmethod
    def to_response(
        invoice: Invoice,
        config: CurrencyConfig,
        now: Optional[datetime] = None
    ) -> InvoiceResponse:
        summary = invoice_summary(
            invoice,
            config.exchange_rate,
            now or datetime.now(timezone.utc),
            config.secondary_currency.value
        )
        return InvoiceResponse.from_invoice(invoice, summary)

    @staticmethod
    async def create(invoice_in: InvoiceCreate) -> InvoiceResponse:
        """Create an invoice from an order, or a standalone one for a customer."""
        db = await get_database()
        invoice_repo = InvoiceRepository(db)

        if invoice_in.order_id:
            order_repo = OrderRepository(db)
            order = await order_repo.get_order(invoice_in.order_id)
            if not order:
                raise HTTPException(status_code=404, detail="Order not found")
            if order.status == OrderStatus.INVOICED:
                raise HTTPException(status_code=409, detail="Order is already invoiced")

            invoice = create_invoice_from_order(
                order.to_snapshot(),
                invoice_in.due_date,
                customer_id=order.customer_id or invoice_in.customer_id,
                order_id=str(order.id),
                notes=invoice_in.notes
            )
            try:
                invoice = await invoice_repo.create_invoice(invoice)
            except DuplicateKeyError:
                raise HTTPException(status_code=409, detail="Order is already invoiced")
            await order_repo.mark_invoiced(str(order.id), str(invoice.id))
        else:
            invoice = create_invoice(
                invoice_in.customer_id,
                invoice_in.total,
                invoice_in.due_date,
                notes=invoice_in.notes
            )
            invoice = await invoice_repo.create_invoice(invoice)

        logger.info(
            "invoice_created",
            invoice_id=str(invoice.id),
            order_id=invoice.order_id,
            customer_id=invoice.customer_id,
            total=str(invoice.total)
        )
        return InvoiceService.to_response(invoice, await CurrencyService.get_active_config())

    @staticmethod
    async def get(invoice_id: str) -> InvoiceResponse:
        db = await get_database()
        invoice = await InvoiceRepository(db).get_invoice(invoice_id)
        if not invoice:
            raise HTTPException(status_code=404, detail="Invoice not found")
        return InvoiceService.to_response(invoice, await CurrencyService.get_active_config())

    @staticmethod
    async def list_invoices(
        customer_id: Optional[str] = None,
        status: Optional[PaymentStatus] = None
    ) -> List[InvoiceResponse]:
        """
        Invoices by due date, optionally for one customer.

        status matches the display status (overdue wins over unpaid and
        partial). It is derived, not stored, so filtering happens after
        loading.
        """
        db = await get_database()
        invoices = await InvoiceRepository(db).list_invoices(customer_id)
        config = await CurrencyService.get_active_config()
        now = datetime.now(timezone.utc)
        if status:
            invoices = [invoice for invoice in invoices if invoice.display_status(now) == status]
        return [InvoiceService.to_response(invoice, config, now) for invoice in invoices]

    @staticmethod
    async def record_payment(invoice_id: str, payment_in: PaymentCreate) -> InvoiceResponse:
        """
        Record a payment against the stored invoice.

        Ledger errors (invalid amount, overpayment) propagate unchanged and
        leave the stored invoice untouched.
        """
        config = await CurrencyService.get_active_config()
        db = await get_database()

        def apply(invoice: Invoice) -> Invoice:
            return record_payment(
                invoice,
                payment_in.amount,
                payment_in.method,
                note=payment_in.note,
                amount_secondary=payment_in.amount_secondary,
                rate=config.exchange_rate
            )

        invoice = await InvoiceRepository(db).append_payment(
            invoice_id,
            apply,
            max_attempts=settings.PAYMENT_COMMIT_RETRIES
        )
        if not invoice:
            raise HTTPException(status_code=404, detail="Invoice not found")

        logger.info(
            "payment_recorded",
            invoice_id=invoice_id,
            amount=str(payment_in.amount),
            method=payment_in.method.value,
            remaining=str(invoice.remaining_balance),
            status=invoice.payment_status().value
        )
        return InvoiceService.to_response(invoice, config)
