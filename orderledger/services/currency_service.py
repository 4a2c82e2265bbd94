from decimal import Decimal
import structlog

from orderledger.core.config import settings
from orderledger.db.session import get_database
from orderledger.models.currency import CurrencyConfig
from orderledger.repositories.tenant_repo import TenantRepository
from orderledger.schemas.currency import CurrencyConfigUpdate, CurrencyConfigResponse, ConversionResponse
from orderledger.utils.currency import convert, format_dual, resolve_rate

logger = structlog.get_logger(__name__)


class CurrencyService:
    @staticmethod
    def default_config() -> CurrencyConfig:
        return CurrencyConfig(
            base_currency=settings.BASE_CURRENCY,
            secondary_currency=settings.SECONDARY_CURRENCY,
            exchange_rate=resolve_rate(None, settings.DEFAULT_EXCHANGE_RATE)
        )

    @staticmethod
    async def get_active_config() -> CurrencyConfig:
        """
        Rate and secondary currency to display and convert with.

        Read once per request; a tenant without config degrades to the
        defaults, never an error.
        """
        db = await get_database()
        config = await TenantRepository(db).get_currency_config(settings.TENANT_ID)
        if config is None:
            return CurrencyService.default_config()
        return config

    @staticmethod
    async def get_config() -> CurrencyConfigResponse:
        """Tenant currency config, or the defaults when none is stored."""
        db = await get_database()
        config = await TenantRepository(db).get_currency_config(settings.TENANT_ID)
        if config is None:
            logger.warning("currency_config_missing", tenant_id=settings.TENANT_ID)
            return CurrencyConfigResponse(**CurrencyService.default_config().model_dump(), is_default=True)
        return CurrencyConfigResponse(**config.model_dump())

    @staticmethod
    async def set_config(config_in: CurrencyConfigUpdate) -> CurrencyConfigResponse:
        db = await get_database()
        config = await TenantRepository(db).set_currency_config(
            settings.TENANT_ID,
            CurrencyConfig(**config_in.model_dump())
        )
        logger.info(
            "exchange_rate_updated",
            tenant_id=settings.TENANT_ID,
            exchange_rate=str(config.exchange_rate)
        )
        return CurrencyConfigResponse(**config.model_dump())

    @staticmethod
    async def convert(amount: Decimal) -> ConversionResponse:
        config = await CurrencyService.get_active_config()
        exchange_rate = config.as_exchange_rate()
        return ConversionResponse(
            amount=amount,
            converted=convert(amount, exchange_rate.rate),
            exchange_rate=exchange_rate.rate,
            rate_updated_at=exchange_rate.updated_at,
            display=format_dual(amount, exchange_rate.rate, config.secondary_currency.value)
        )
