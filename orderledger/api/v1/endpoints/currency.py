from decimal import Decimal
from fastapi import APIRouter
from orderledger.schemas.currency import CurrencyConfigUpdate, CurrencyConfigResponse, ConversionResponse
from orderledger.services.currency_service import CurrencyService

router = APIRouter()

@router.get("/config", response_model=CurrencyConfigResponse)
async def get_currency_config():
    return await CurrencyService.get_config()

@router.put("/config", response_model=CurrencyConfigResponse)
async def update_currency_config(config_in: CurrencyConfigUpdate):
    """Set the tenant exchange rate"""
    return await CurrencyService.set_config(config_in)

@router.get("/convert", response_model=ConversionResponse)
async def convert_amount(amount: Decimal):
    """Convert a base amount at the current tenant rate"""
    return await CurrencyService.convert(amount)
