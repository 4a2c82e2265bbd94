from decimal import Decimal
from pydantic_settings import BaseSettings, SettingsConfigDict

from orderledger.models.currency import Currency
from orderledger.utils import currency as currency_utils

class Settings(BaseSettings):
    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # API Settings
    PROJECT_NAME: str = "Order Ledger API"
    API_V1_STR: str = "/api/v1"
    PROJECT_VERSION: str = "0.1.0"
    DESCRIPTION: str = "Order totals, invoices and payment tracking"

    # MongoDB
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DB: str = "orderledger"

    # Tenant / currency
    TENANT_ID: str = "default"
    BASE_CURRENCY: Currency = Currency.USD
    SECONDARY_CURRENCY: Currency = Currency.LBP
    DEFAULT_EXCHANGE_RATE: Decimal = currency_utils.DEFAULT_EXCHANGE_RATE

    # Ledger
    PAYMENT_COMMIT_RETRIES: int = 3

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env"
    )

settings = Settings()
