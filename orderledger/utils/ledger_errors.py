"""Ledger validation errors. Each carries the message shown to the user."""
from decimal import Decimal

from orderledger.utils.currency import format_base


class LedgerError(Exception):
    """Base class for ledger rule violations. Nothing is mutated when raised."""
    message = "Invalid ledger operation"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class EmptyOrderError(LedgerError):
    message = "Add at least one item to the order"


class InvalidAmountError(LedgerError):
    message = "Enter a positive amount"


class OverpaymentError(LedgerError):
    def __init__(self, remaining: Decimal):
        self.remaining = remaining
        super().__init__(f"Amount exceeds remaining balance of {format_base(remaining)}")


class ConcurrentPaymentError(LedgerError):
    message = "Invoice was modified by another payment, please retry"
