from typing import Optional
from datetime import datetime, timezone
from motor.motor_asyncio import AsyncIOMotorDatabase

from orderledger.models.currency import CurrencyConfig


class TenantRepository:
    """Tenant configuration; the ledger only reads and updates the currency config."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["tenants"]

    async def get_currency_config(self, tenant_id: str) -> Optional[CurrencyConfig]:
        doc = await self.collection.find_one(
            {"tenant_id": tenant_id},
            {"currency_config": 1}
        )
        if not doc or not doc.get("currency_config"):
            return None
        return CurrencyConfig(**doc["currency_config"])

    async def set_currency_config(self, tenant_id: str, config: CurrencyConfig) -> CurrencyConfig:
        now = datetime.now(timezone.utc)
        config = config.model_copy(update={"updated_at": now})
        await self.collection.update_one(
            {"tenant_id": tenant_id},
            {
                "$set": {
                    "currency_config": config.model_dump(mode="python"),
                    "updated_at": now
                },
                "$setOnInsert": {"tenant_id": tenant_id, "created_at": now}
            },
            upsert=True
        )
        return config

