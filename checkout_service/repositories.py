"""Stores for baskets, catalog items and orders."""

from itertools import count
from typing import Iterable, Optional, Protocol

from .logger import logger
from .schemas import Basket, CatalogItem, Order


class BasketRepository(Protocol):
    """Protocol for reading baskets together with their items."""

    async def get(self, basket_id: int) -> Optional[Basket]:
        """Return the basket with the given id, or None if there is none."""
        ...


class CatalogRepository(Protocol):
    """Protocol for reading catalog items."""

    async def list_by_ids(self, item_ids: Iterable[int]) -> list[CatalogItem]:
        """Return the catalog items matching the given ids; unknown ids are skipped."""
        ...


class OrderRepository(Protocol):
    """Protocol for persisting orders."""

    async def add(self, order: Order) -> Order:
        """Persist the order and return it with its assigned id."""
        ...

    async def get(self, order_id: int) -> Optional[Order]:
        """Return the order with the given id, or None if there is none."""
        ...


class InMemoryBasketRepository:
    """Basket store backed by a dict, keyed by basket id."""

    def __init__(self, baskets: Iterable[Basket] = ()):
        self._baskets = {basket.id: basket for basket in baskets}

    def save(self, basket: Basket) -> None:
        self._baskets[basket.id] = basket

    async def get(self, basket_id: int) -> Optional[Basket]:
        return self._baskets.get(basket_id)


class InMemoryCatalogRepository:
    """Catalog store backed by a dict, keyed by catalog item id."""

    def __init__(self, items: Iterable[CatalogItem] = ()):
        self._items = {item.id: item for item in items}

    def save(self, item: CatalogItem) -> None:
        self._items[item.id] = item

    async def list_by_ids(self, item_ids: Iterable[int]) -> list[CatalogItem]:
        return [self._items[item_id] for item_id in dict.fromkeys(item_ids) if item_id in self._items]


class InMemoryOrderRepository:
    """Order store that assigns sequential ids starting at 1."""

    def __init__(self):
        self._orders: dict[int, Order] = {}
        self._ids = count(1)

    async def add(self, order: Order) -> Order:
        stored = order.model_copy(update={"id": next(self._ids)})
        self._orders[stored.id] = stored
        logger.debug(f"Stored order {stored.id} for buyer {stored.buyer_id}")
        return stored

    async def get(self, order_id: int) -> Optional[Order]:
        return self._orders.get(order_id)
