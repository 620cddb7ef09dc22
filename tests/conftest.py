"""Test fixtures for the checkout service tests."""

from decimal import Decimal
from unittest.mock import Mock

import pytest

from checkout_service.config import WarehouseSettings
from checkout_service.delivery import DeliveryClient
from checkout_service.orders import OrderService
from checkout_service.producer import WarehouseProducer
from checkout_service.repositories import (
    InMemoryBasketRepository,
    InMemoryCatalogRepository,
    InMemoryOrderRepository,
)
from checkout_service.schemas import Address, Basket, BasketItem, CatalogItem


class RecordingOrderRepository(InMemoryOrderRepository):
    """Order store that records each persist in a shared call log."""

    def __init__(self, calls):
        super().__init__()
        self.calls = calls

    async def add(self, order):
        self.calls.append("persist")
        return await super().add(order)


@pytest.fixture
def settings():
    """Settings pointing at local test endpoints."""
    return WarehouseSettings(
        kafka_bootstrap_servers="localhost:9092",
        warehouse_topic="test.reservations",
        delivery_url="http://warehouse.test/api/orders",
        catalog_base_url="http://catalog.test",
    )


@pytest.fixture
def shipping_address():
    return Address(street="123 Main St.", city="Kent", state="OH", country="United States", zip_code="44240")


@pytest.fixture
def catalog_repository():
    return InMemoryCatalogRepository(
        [
            CatalogItem(id=1, name=".NET Bot Black Sweatshirt", picture_uri="http://catalogbaseurltobereplaced/images/1.png"),
            CatalogItem(id=2, name=".NET Black & White Mug", picture_uri="http://catalogbaseurltobereplaced/images/2.png"),
        ]
    )


@pytest.fixture
def basket():
    """Basket with two items totalling 25.00."""
    return Basket(
        id=7,
        buyer_id="buyer-123",
        items=[
            BasketItem(catalog_item_id=1, unit_price=Decimal("10"), quantity=2),
            BasketItem(catalog_item_id=2, unit_price=Decimal("5"), quantity=1),
        ],
    )


@pytest.fixture
def basket_repository(basket):
    return InMemoryBasketRepository([basket, Basket(id=8, buyer_id="buyer-456", items=[])])


@pytest.fixture
def calls():
    """Ordered log of the side effects a checkout performed."""
    return []


@pytest.fixture
def order_repository(calls):
    return RecordingOrderRepository(calls)


@pytest.fixture
def mock_producer(calls):
    producer = Mock(spec=WarehouseProducer)
    producer.publish_reservation.side_effect = lambda *args: calls.append("queue")
    return producer


@pytest.fixture
def mock_delivery_client(calls):
    client = Mock(spec=DeliveryClient)
    client.post_delivery.side_effect = lambda delivery: calls.append("http")
    return client


@pytest.fixture
def order_service(
    basket_repository, catalog_repository, order_repository, settings, mock_producer, mock_delivery_client
):
    """OrderService wired to in-memory stores and mocked warehouse clients."""
    return OrderService(
        basket_repository,
        catalog_repository,
        order_repository,
        settings,
        producer_factory=lambda _: mock_producer,
        delivery_client_factory=lambda _: mock_delivery_client,
    )
