from decimal import Decimal

import structlog
from bson.codec_options import TypeCodec, TypeRegistry
from bson.decimal128 import Decimal128
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from orderledger.core.config import settings

logger = structlog.get_logger(__name__)


class DecimalCodec(TypeCodec):
    """Stores Decimal as BSON Decimal128 and reads it back as Decimal."""
    python_type = Decimal
    bson_type = Decimal128

    def transform_python(self, value):
        return Decimal128(value)

    def transform_bson(self, value):
        return value.to_decimal()


type_registry = TypeRegistry([DecimalCodec()])


class MongoDatabase:
    """MongoDB connection manager."""
    
    client: AsyncIOMotorClient = None
    db: AsyncIOMotorDatabase = None

mongodb = MongoDatabase()

async def connect_to_mongo():
    """Connect to MongoDB."""
    mongodb.client = AsyncIOMotorClient(
        settings.MONGODB_URI,
        tz_aware=True,
        type_registry=type_registry,
    )
    mongodb.db = mongodb.client[settings.MONGODB_DB]
    
    await create_indexes()
    logger.info("mongo_connected", database=settings.MONGODB_DB)

async def close_mongo_connection():
    """Disconnect from MongoDB."""
    if mongodb.client is not None:
        mongodb.client.close()
        logger.info("mongo_disconnected")

async def create_indexes():
    """Create database indexes."""
    await mongodb.db["orders"].create_index("customer_id")
    await mongodb.db["orders"].create_index("status")

    await mongodb.db["invoices"].create_index("customer_id")
    await mongodb.db["invoices"].create_index("due_date")
    # An order is invoiced at most once
    await mongodb.db["invoices"].create_index(
        "order_id",
        unique=True,
        partialFilterExpression={"order_id": {"$type": "string"}},
    )

    await mongodb.db["tenants"].create_index("tenant_id", unique=True)
