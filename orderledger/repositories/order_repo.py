from typing import List, Optional
from datetime import datetime, timezone
from motor.motor_asyncio import AsyncIOMotorDatabase
from bson import ObjectId
from bson.errors import InvalidId

from orderledger.models.order import Order, OrderStatus


class OrderRepository:
    """Order database operations. Orders are written once and only change status."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["orders"]

    async def create_order(self, order: Order) -> Order:
        result = await self.collection.insert_one(order.to_document())
        order.id = result.inserted_id
        return order

    async def get_order(self, order_id: str) -> Optional[Order]:
        try:
            oid = ObjectId(order_id)
        except (InvalidId, TypeError):
            return None

        doc = await self.collection.find_one({"_id": oid})
        if doc:
            return Order(**doc)
        return None

    async def list_orders(
        self,
        customer_id: Optional[str] = None,
        status: Optional[OrderStatus] = None
    ) -> List[Order]:
        query = {}
        if customer_id:
            query["customer_id"] = customer_id
        if status:
            query["status"] = status.value
        docs = await self.collection.find(query).sort("created_at", -1).to_list(None)
        return [Order(**doc) for doc in docs]

    async def mark_invoiced(self, order_id: str, invoice_id: str) -> bool:
        """Flip status to invoiced. False if the order is missing or already invoiced."""
        result = await self.collection.update_one(
            {"_id": ObjectId(order_id), "status": {"$ne": OrderStatus.INVOICED.value}},
            {
                "$set": {
                    "status": OrderStatus.INVOICED.value,
                    "invoice_id": invoice_id,
                    "updated_at": datetime.now(timezone.utc)
                }
            }
        )
        return result.modified_count > 0
