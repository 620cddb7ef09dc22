"""Pydantic models for baskets, orders and warehouse payloads."""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


class WarehouseModel(BaseModel):
    """Base for payloads sent to the warehouse, serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Address(WarehouseModel):
    """Shipping address of an order."""

    street: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str
    country: str = Field(..., min_length=1)
    zip_code: str = Field(..., min_length=1)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "street": "123 Main St.",
                "city": "Kent",
                "state": "OH",
                "country": "United States",
                "zipCode": "44240",
            }
        }
    )


class BasketItem(BaseModel):
    """A catalog item in a basket with the price locked in when it was added.

    Attributes:
        catalog_item_id (int): Identifier of the catalog item.
        unit_price (Decimal): Price per unit at the time the item was added.
        quantity (int): Number of units.
    """

    catalog_item_id: int
    unit_price: Decimal = Field(..., ge=0)
    quantity: int = Field(..., ge=0)


class Basket(BaseModel):
    """A buyer's in-progress selection of catalog items."""

    id: int
    buyer_id: str = Field(..., min_length=1)
    items: list[BasketItem] = Field(default_factory=list)


class CatalogItem(BaseModel):
    """Catalog metadata for a sellable item."""

    id: int = Field(..., gt=0)
    name: str = Field(..., min_length=1)
    picture_uri: str = Field(..., min_length=1)


class CatalogItemOrdered(BaseModel):
    """Snapshot of a catalog item taken when the order is placed.

    Later catalog changes must not alter historical orders, so the name and
    picture are copied instead of referenced.
    """

    catalog_item_id: int = Field(..., gt=0)
    product_name: str = Field(..., min_length=1)
    picture_uri: str = Field(..., min_length=1)


class OrderItem(BaseModel):
    """An ordered item together with the unit price and quantity paid for it."""

    item_ordered: CatalogItemOrdered
    unit_price: Decimal
    units: int


class Order(BaseModel):
    """The durable record created once a basket is checked out.

    Attributes:
        id (int | None): Identifier assigned by the order store on persist.
        buyer_id (str): Buyer who placed the order.
        order_date (datetime): UTC timestamp when the order was constructed.
        ship_to_address (Address): Where the order ships to.
        order_items (list[OrderItem]): Snapshot of the ordered items.
    """

    id: Optional[int] = None
    buyer_id: str = Field(..., min_length=1)
    order_date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    ship_to_address: Address
    order_items: list[OrderItem]

    def total(self) -> Decimal:
        """Sum of unit price times units over all order items."""
        return sum((item.unit_price * item.units for item in self.order_items), Decimal("0"))


class WarehouseOrderInfo(WarehouseModel):
    """Quantity of a catalog item to reserve at the warehouse."""

    catalog_item_id: int
    quantity: int


WarehouseOrderInfoList = TypeAdapter(list[WarehouseOrderInfo])


class DeliveryInfo(WarehouseModel):
    """Delivery details posted to the warehouse, never persisted locally."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    shipping_address: Address
    order_info: list[WarehouseOrderInfo]
    final_price: str


class CheckoutStatus(str, Enum):
    """Outcome of a checkout."""

    NOTIFIED = "notified"
    NOTIFY_FAILED = "notify_failed"
    ABORTED = "aborted"


class PlaceOrderResult(BaseModel):
    """Result of a checkout, distinguishing a failed warehouse notification.

    Attributes:
        status (CheckoutStatus): Outcome of the checkout.
        order (Order | None): The persisted order, when one was created.
        error (str | None): Why the notification failed or the checkout aborted.
    """

    status: CheckoutStatus
    order: Optional[Order] = None
    error: Optional[str] = None


class CheckoutResponse(BaseModel):
    """Body returned by the checkout endpoint."""

    status: CheckoutStatus
    order_id: Optional[int] = None
    detail: Optional[str] = None
