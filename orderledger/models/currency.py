from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field

from orderledger.models.base import Money, _utcnow


class Currency(str, Enum):
    USD = "USD"
    EUR = "EUR"
    AED = "AED"
    SAR = "SAR"
    QAR = "QAR"
    KWD = "KWD"
    LBP = "LBP"


class ExchangeRate(BaseModel):
    """Base-to-secondary multiplier; owned by tenant configuration."""
    rate: Money = Field(gt=0)
    updated_at: datetime = Field(default_factory=_utcnow)


class CurrencyConfig(BaseModel):
    base_currency: Currency = Currency.USD
    secondary_currency: Currency = Currency.LBP
    exchange_rate: Money = Field(gt=0)
    updated_at: datetime = Field(default_factory=_utcnow)

    def as_exchange_rate(self) -> ExchangeRate:
        return ExchangeRate(rate=self.exchange_rate, updated_at=self.updated_at)


class DualAmount(BaseModel):
    """The same amount rendered in both currencies."""
    base: str
    secondary: str
