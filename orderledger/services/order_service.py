from typing import List, Optional
import structlog
from fastapi import HTTPException

from orderledger.db.session import get_database
from orderledger.models.line_item import ProductRef
from orderledger.models.currency import CurrencyConfig
from orderledger.models.order import Order, OrderStatus
from orderledger.repositories.order_repo import OrderRepository
from orderledger.schemas.order import OrderCreate, OrderResponse
from orderledger.services.currency_service import CurrencyService
from orderledger.utils.currency import format_dual
from orderledger.utils.line_items import LineItemAggregator
from orderledger.utils.order_totals import snapshot

logger = structlog.get_logger(__name__)


class OrderService:
    @staticmethod
    def build_aggregator(order_in: OrderCreate) -> LineItemAggregator:
        """Replay the submitted lines through an aggregator so duplicates merge."""
        aggregator = LineItemAggregator()
        aggregator.set_customer(order_in.customer_id)
        aggregator.set_currency(order_in.currency)
        aggregator.set_notes(order_in.notes or "")
        aggregator.set_internal_notes(order_in.internal_notes or "")
        for line in order_in.items:
            product = ProductRef(
                product_id=line.product_id,
                product_name=line.product_name,
                product_sku=line.product_sku,
                unit_price=line.unit_price
            )
            aggregator.add_item(product, line.quantity)
        return aggregator

    @staticmethod
    async def submit(order_in: OrderCreate) -> OrderResponse:
        """Snapshot and store a new order. Raises EmptyOrderError when no line survives."""
        aggregator = OrderService.build_aggregator(order_in)
        order_total = snapshot(aggregator)

        db = await get_database()
        order = await OrderRepository(db).create_order(Order.from_snapshot(order_total))
        aggregator.clear()

        logger.info(
            "order_submitted",
            order_id=str(order.id),
            customer_id=order.customer_id,
            total=str(order.total),
            lines=len(order.items)
        )
        return OrderService.to_response(order, await CurrencyService.get_active_config())

    @staticmethod
    def to_response(order: Order, config: CurrencyConfig) -> OrderResponse:
        total_display = format_dual(order.total, config.exchange_rate, config.secondary_currency.value)
        return OrderResponse.from_order(order, total_display)

    @staticmethod
    async def get(order_id: str) -> Optional[Order]:
        db = await get_database()
        return await OrderRepository(db).get_order(order_id)

    @staticmethod
    async def get_response(order_id: str) -> OrderResponse:
        order = await OrderService.get(order_id)
        if not order:
            raise HTTPException(status_code=404, detail="Order not found")
        return OrderService.to_response(order, await CurrencyService.get_active_config())

    @staticmethod
    async def list_orders(
        customer_id: Optional[str] = None,
        status: Optional[OrderStatus] = None
    ) -> List[OrderResponse]:
        db = await get_database()
        orders = await OrderRepository(db).list_orders(customer_id, status)
        config = await CurrencyService.get_active_config()
        return [OrderService.to_response(order, config) for order in orders]
