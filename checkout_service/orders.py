"""Order placement workflow: basket to warehouse-notified, persisted order."""

import asyncio
from decimal import Decimal
from typing import Callable, Optional

from pydantic import ValidationError

from .config import WarehouseSettings
from .delivery import DeliveryClient
from .exceptions import BasketNotFoundError, CatalogItemNotFoundError, EmptyBasketError, InvalidCatalogItemError
from .logger import logger
from .producer import WarehouseProducer
from .repositories import BasketRepository, CatalogRepository, OrderRepository
from .schemas import (
    Address,
    Basket,
    CatalogItemOrdered,
    CheckoutStatus,
    DeliveryInfo,
    Order,
    OrderItem,
    PlaceOrderResult,
    WarehouseOrderInfo,
)
from .uri_composer import UriComposer


class OrderService:
    """Places orders from baskets and hands them over to the warehouse.

    Each checkout runs strictly in sequence: validate the basket, snapshot
    its items into an order, publish the stock reservation to Kafka, post the
    delivery details over HTTP, then persist the order. A failed reservation
    is logged and reported on the result; a failed delivery post aborts the
    checkout before the order is persisted.

    Args:
        basket_repository: Store the basket is read from.
        catalog_repository: Store the catalog items are read from.
        order_repository: Store the new order is written to.
        settings (WarehouseSettings): Warehouse connection settings.
        producer_factory: Builds the per-checkout Kafka producer.
        delivery_client_factory: Builds the per-checkout delivery HTTP client.
    """

    def __init__(
        self,
        basket_repository: BasketRepository,
        catalog_repository: CatalogRepository,
        order_repository: OrderRepository,
        settings: WarehouseSettings,
        producer_factory: Callable[[WarehouseSettings], WarehouseProducer] = WarehouseProducer,
        delivery_client_factory: Callable[[WarehouseSettings], DeliveryClient] = DeliveryClient,
        uri_composer: Optional[UriComposer] = None,
    ):
        self.basket_repository = basket_repository
        self.catalog_repository = catalog_repository
        self.order_repository = order_repository
        self.settings = settings
        self.producer_factory = producer_factory
        self.delivery_client_factory = delivery_client_factory
        self.uri_composer = uri_composer or UriComposer(settings.catalog_base_url)

    async def place_order(self, basket_id: int, shipping_address: Address) -> PlaceOrderResult:
        """Check out a basket.

        Args:
            basket_id (int): Basket to check out.
            shipping_address (Address): Where the order ships to.

        Returns:
            PlaceOrderResult: NOTIFIED, or NOTIFY_FAILED when the warehouse
            reservation could not be published, with the persisted order.

        Raises:
            BasketNotFoundError: If the basket does not exist.
            EmptyBasketError: If the basket has no items.
            CatalogItemNotFoundError: If a basket item is not in the catalog.
            InvalidCatalogItemError: If a catalog item cannot be snapshotted.
            requests.RequestException: If the delivery post fails.
        """
        basket = await self.basket_repository.get(basket_id)
        if basket is None:
            raise BasketNotFoundError(basket_id)
        if not basket.items:
            raise EmptyBasketError(basket_id)

        order = await self._build_order(basket, shipping_address)
        warehouse_items = [
            WarehouseOrderInfo(catalog_item_id=item.catalog_item_id, quantity=item.quantity) for item in basket.items
        ]
        logger.info(f"Placing order for basket {basket.id} (buyer {basket.buyer_id}, {len(order.order_items)} items)")

        error = await self._notify_warehouse(basket.buyer_id, warehouse_items)

        delivery = DeliveryInfo(
            shipping_address=shipping_address,
            order_info=warehouse_items,
            final_price=format_price(order.total()),
        )
        await self._post_delivery(delivery)

        order = await self.order_repository.add(order)
        logger.info(f"Order {order.id} placed for buyer {order.buyer_id}, total {delivery.final_price}")

        if error is not None:
            return PlaceOrderResult(status=CheckoutStatus.NOTIFY_FAILED, order=order, error=error)
        return PlaceOrderResult(status=CheckoutStatus.NOTIFIED, order=order)

    async def _build_order(self, basket: Basket, shipping_address: Address) -> Order:
        item_ids = list(dict.fromkeys(item.catalog_item_id for item in basket.items))
        catalog_items = {item.id: item for item in await self.catalog_repository.list_by_ids(item_ids)}

        order_items = []
        for basket_item in basket.items:
            catalog_item = catalog_items.get(basket_item.catalog_item_id)
            if catalog_item is None:
                raise CatalogItemNotFoundError(basket_item.catalog_item_id)
            try:
                item_ordered = CatalogItemOrdered(
                    catalog_item_id=catalog_item.id,
                    product_name=catalog_item.name,
                    picture_uri=self.uri_composer.compose_pic_uri(catalog_item.picture_uri),
                )
            except ValidationError as e:
                invalid = ", ".join(str(error["loc"][0]) for error in e.errors())
                raise InvalidCatalogItemError(catalog_item.id, f"invalid {invalid}") from e
            order_items.append(
                OrderItem(item_ordered=item_ordered, unit_price=basket_item.unit_price, units=basket_item.quantity)
            )

        return Order(buyer_id=basket.buyer_id, ship_to_address=shipping_address, order_items=order_items)

    async def _notify_warehouse(self, buyer_id: str, items: list[WarehouseOrderInfo]) -> Optional[str]:
        """Publish the reservation; return the error message instead of raising."""
        producer = None
        try:
            producer = self.producer_factory(self.settings)
            await asyncio.to_thread(producer.publish_reservation, buyer_id, items)
            logger.info(f"Warehouse notified of reservation for buyer {buyer_id}")
            return None
        except Exception as e:
            logger.error(f"Failed to notify warehouse for buyer {buyer_id}: {e}")
            return str(e)
        finally:
            if producer is not None:
                try:
                    producer.close()
                except Exception as e:
                    logger.warning(f"Failed to close warehouse producer: {e}")

    async def _post_delivery(self, delivery: DeliveryInfo) -> None:
        client = self.delivery_client_factory(self.settings)
        try:
            await asyncio.to_thread(client.post_delivery, delivery)
        finally:
            client.close()


def format_price(amount: Decimal) -> str:
    """Format an amount as text with two decimal places."""
    return f"{amount:.2f}"
