from decimal import Decimal
from pydantic import BaseModel, Field, ConfigDict, computed_field

from orderledger.models.base import Money


class ProductRef(BaseModel):
    """Catalog fields the ledger reads when a product is added to an order."""
    product_id: str
    product_name: str
    product_sku: str = ""
    unit_price: Money = Field(ge=0)  # Base currency


class LineItem(BaseModel):
    """
    One product row of an order.

    Frozen: quantity changes produce a new LineItem, so a copy handed out
    can never be changed from under its holder.
    """
    model_config = ConfigDict(frozen=True)

    product_id: str
    product_name: str
    product_sku: str = ""
    quantity: int = Field(ge=1)
    unit_price: Money = Field(ge=0)

    @computed_field
    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity

    @classmethod
    def from_product(cls, product: ProductRef, quantity: int) -> "LineItem":
        return cls(
            product_id=product.product_id,
            product_name=product.product_name,
            product_sku=product.product_sku,
            quantity=quantity,
            unit_price=product.unit_price,
        )

    def with_quantity(self, quantity: int) -> "LineItem":
        # model_copy skips validation, so go through the constructor
        return LineItem(
            product_id=self.product_id,
            product_name=self.product_name,
            product_sku=self.product_sku,
            quantity=quantity,
            unit_price=self.unit_price,
        )
