"""
InvoiceRepository - Invoices and their append-only payments.

Commit protocol for payments:
1. Read the stored invoice (payments + version)
2. Apply the ledger rules to that stored state
3. Push the new payment only if version is unchanged
4. On a lost race, go back to 1 with the fresher state

Step 3 makes the overpayment check authoritative: a payment is only ever
committed against the exact payment sequence it was validated against.
"""

from typing import Callable, List, Optional
from motor.motor_asyncio import AsyncIOMotorDatabase
from bson import ObjectId
from bson.errors import InvalidId
import structlog

from orderledger.models.invoice import Invoice
from orderledger.utils.ledger_errors import ConcurrentPaymentError

logger = structlog.get_logger(__name__)


class InvoiceRepository:
    """Repository for invoices."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["invoices"]

    async def create_invoice(self, invoice: Invoice) -> Invoice:
        result = await self.collection.insert_one(invoice.to_document())
        invoice.id = result.inserted_id
        return invoice

    async def get_invoice(self, invoice_id: str) -> Optional[Invoice]:
        try:
            oid = ObjectId(invoice_id)
        except (InvalidId, TypeError):
            return None

        doc = await self.collection.find_one({"_id": oid})
        if doc:
            return Invoice(**doc)
        return None

    async def list_invoices(self, customer_id: Optional[str] = None) -> List[Invoice]:
        query = {"customer_id": customer_id} if customer_id else {}
        docs = await self.collection.find(query).sort("due_date", 1).to_list(None)
        return [Invoice(**doc) for doc in docs]

    async def append_payment(
        self,
        invoice_id: str,
        apply: Callable[[Invoice], Invoice],
        max_attempts: int = 3
    ) -> Optional[Invoice]:
        """
        Commit one payment produced by apply(stored_invoice).

        apply receives the durably stored invoice and must return it with
        exactly one payment appended; any ledger error it raises propagates
        and nothing is written.

        Returns the updated invoice, or None if the invoice does not exist.
        Raises ConcurrentPaymentError if every attempt lost a race.
        """
        for attempt in range(1, max_attempts + 1):
            current = await self.get_invoice(invoice_id)
            if current is None:
                return None

            updated = apply(current)
            payment = updated.payments[-1]

            result = await self.collection.update_one(
                {"_id": current.id, "version": current.version},
                {
                    "$push": {"payments": payment.model_dump()},
                    "$set": {
                        "version": updated.version,
                        "updated_at": updated.updated_at
                    }
                }
            )
            if result.modified_count == 1:
                return updated

            logger.warning(
                "payment_commit_conflict",
                invoice_id=invoice_id,
                attempt=attempt,
                version=current.version
            )

        raise ConcurrentPaymentError()
