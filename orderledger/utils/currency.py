"""
Base/secondary currency conversion and display.

Stateless: the exchange rate is always passed in. Whoever owns tenant
configuration supplies it, falling back to DEFAULT_EXCHANGE_RATE.
"""
from decimal import Decimal, ROUND_DOWN, ROUND_HALF_UP
from typing import Optional, Union

import structlog

from orderledger.models.currency import Currency, DualAmount

logger = structlog.get_logger(__name__)

# USD -> LBP
DEFAULT_EXCHANGE_RATE = Decimal("88000")
DEFAULT_SECONDARY_CURRENCY = Currency.LBP.value

CENTS = Decimal("0.01")
WHOLE = Decimal("1")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def convert(base_amount: Number, rate: Number) -> Decimal:
    """Base amount times rate. Unrounded; rounding is a display concern."""
    return to_decimal(base_amount) * to_decimal(rate)


def resolve_rate(rate: Optional[Number], default: Number = DEFAULT_EXCHANGE_RATE) -> Decimal:
    """Return rate if usable, else the default. Never raises for a missing rate."""
    if rate is not None:
        try:
            value = to_decimal(rate)
        except ArithmeticError:
            value = None
        if value is not None and value.is_finite() and value > 0:
            return value
    logger.warning("exchange_rate_fallback", supplied=str(rate), default=str(default))
    return to_decimal(default)


def format_base(amount: Number) -> str:
    """$1,234.56"""
    value = to_decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_secondary(amount: Number, currency_code: str = DEFAULT_SECONDARY_CURRENCY) -> str:
    """1,234 LBP - the secondary currency has no minor unit, so truncate."""
    value = to_decimal(amount).quantize(WHOLE, rounding=ROUND_DOWN)
    if value == 0:
        # -0.5 truncates to -0
        value = value.copy_abs()
    return f"{value:,.0f} {currency_code}"


def format_dual(base_amount: Number, rate: Number, currency_code: str = DEFAULT_SECONDARY_CURRENCY) -> DualAmount:
    """Both display strings for one amount, computed together so they cannot drift."""
    base = to_decimal(base_amount)
    return DualAmount(
        base=format_base(base),
        secondary=format_secondary(convert(base, rate), currency_code),
    )


def suggest_secondary_amount(base_amount: Number, rate: Number) -> Decimal:
    """Prefill for the secondary amount of a payment, kept to two decimals."""
    return convert(base_amount, rate).quantize(CENTS, rounding=ROUND_HALF_UP)
