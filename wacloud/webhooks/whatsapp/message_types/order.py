"""WhatsApp order message schema (cart sent from a catalog)."""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from wacloud.webhooks.core.base_message import BaseWebhookMessage


class ProductItem(BaseModel):
    """Individual product item in an order."""

    model_config = ConfigDict(extra="allow", frozen=True)

    product_retailer_id: str = Field(..., description="Product ID in the catalog")
    quantity: int = Field(..., ge=1, description="Quantity ordered")
    item_price: Decimal = Field(..., description="Price per item")
    currency: str = Field(..., description="ISO 4217 currency code")

    @property
    def total_price(self) -> Decimal:
        return self.item_price * self.quantity


class OrderContent(BaseModel):
    """Order message content."""

    model_config = ConfigDict(extra="allow", frozen=True)

    catalog_id: str = Field(..., description="Catalog the products belong to")
    text: str | None = Field(None, description="Message sent along with the order")
    product_items: tuple[ProductItem, ...] = Field(..., min_length=1)

    @property
    def total_amount(self) -> Decimal:
        return sum((item.total_price for item in self.product_items), Decimal(0))


class WhatsAppOrderMessage(BaseWebhookMessage):
    type: Literal["order"]
    order: OrderContent
