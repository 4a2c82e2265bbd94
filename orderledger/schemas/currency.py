from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
from orderledger.models.currency import Currency, DualAmount


class CurrencyConfigUpdate(BaseModel):
    exchange_rate: Decimal = Field(gt=0)
    base_currency: Currency = Currency.USD
    secondary_currency: Currency = Currency.LBP

class CurrencyConfigResponse(BaseModel):
    base_currency: Currency
    secondary_currency: Currency
    exchange_rate: Decimal
    updated_at: Optional[datetime] = None
    is_default: bool = False

class ConversionResponse(BaseModel):
    amount: Decimal
    converted: Decimal
    exchange_rate: Decimal
    rate_updated_at: Optional[datetime] = None
    display: DualAmount
