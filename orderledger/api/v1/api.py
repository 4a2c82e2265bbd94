from fastapi import APIRouter
from orderledger.api.v1.endpoints import orders, invoices, currency

api_router = APIRouter()

api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(invoices.router, prefix="/invoices", tags=["invoices"])
api_router.include_router(currency.router, prefix="/currency", tags=["currency"])
