from typing import List, Optional
from fastapi import APIRouter
from orderledger.models.invoice import PaymentStatus
from orderledger.schemas.invoice import InvoiceCreate, InvoiceResponse, PaymentCreate
from orderledger.services.invoice_service import InvoiceService

router = APIRouter()

@router.get("/", response_model=List[InvoiceResponse])
async def list_invoices(customer_id: Optional[str] = None, status: Optional[PaymentStatus] = None):
    """List invoices, optionally by customer and status (overdue included)"""
    return await InvoiceService.list_invoices(customer_id, status)

@router.post("/", response_model=InvoiceResponse)
async def create_invoice(invoice_in: InvoiceCreate):
    """Create an invoice from an order or for a customer"""
    return await InvoiceService.create(invoice_in)

@router.get("/{invoice_id}", response_model=InvoiceResponse)
async def get_invoice(invoice_id: str):
    """Get an invoice with its derived balance and status"""
    return await InvoiceService.get(invoice_id)

@router.post("/{invoice_id}/payments", response_model=InvoiceResponse)
async def record_payment(invoice_id: str, payment_in: PaymentCreate):
    """Record a payment against an invoice"""
    return await InvoiceService.record_payment(invoice_id, payment_in)
