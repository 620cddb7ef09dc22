"""Tests for the checkout HTTP API."""

from decimal import Decimal
from http import HTTPStatus
from unittest.mock import patch

import pytest
import requests
from fastapi.testclient import TestClient

from checkout_service import __version__
from checkout_service.schemas import Basket, BasketItem, CatalogItem
from checkout_service.server import app, get_order_service


def test_version():
    """Testing package Version."""
    assert __version__ == "0.1.0"


@pytest.fixture
def test_client(order_service):
    """Test client with the checkout routes wired to the mocked order service."""
    app.dependency_overrides[get_order_service] = lambda: order_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def address_body():
    return {"street": "123 Main St.", "city": "Kent", "state": "OH", "country": "United States", "zipCode": "44240"}


@patch("checkout_service.server.AdminClient")
def test_health_check(mock_admin_client, test_client):
    mock_admin_client.return_value.list_topics.return_value = {"topics": ["test.reservations"]}

    response = test_client.get("/health")

    assert response.status_code == HTTPStatus.OK
    assert response.json() == {"kafka": True}


@patch("checkout_service.server.AdminClient")
def test_readiness_check_kafka_down(mock_admin_client, test_client):
    """Test the readiness check when Kafka is unreachable."""
    mock_admin_client.return_value.list_topics.side_effect = Exception("timed out")

    response = test_client.get("/health/ready")

    assert response.status_code == HTTPStatus.OK
    assert response.json() == {"status": "not_ready", "kafka": False}


def test_checkout_success(test_client, address_body, calls):
    response = test_client.post("/baskets/7/checkout", json=address_body)

    assert response.status_code == HTTPStatus.CREATED
    assert response.json() == {"status": "notified", "order_id": 1, "detail": None}
    assert calls == ["queue", "http", "persist"]


def test_checkout_notify_failed(test_client, address_body, mock_producer):
    """Test that a failed reservation still creates the order and reports it."""
    mock_producer.publish_reservation.side_effect = Exception("broker down")

    response = test_client.post("/baskets/7/checkout", json=address_body)

    assert response.status_code == HTTPStatus.CREATED
    assert response.json() == {"status": "notify_failed", "order_id": 1, "detail": "broker down"}


def test_checkout_missing_basket(test_client, address_body):
    response = test_client.post("/baskets/404/checkout", json=address_body)

    assert response.status_code == HTTPStatus.NOT_FOUND
    assert response.json()["status"] == "aborted"


def test_checkout_empty_basket(test_client, address_body, calls):
    response = test_client.post("/baskets/8/checkout", json=address_body)

    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
    assert response.json() == {"status": "aborted", "order_id": None, "detail": "Basket 8 has no items to check out"}
    assert calls == []


def test_checkout_unknown_catalog_item(test_client, address_body, basket_repository, calls):
    basket_repository.save(
        Basket(id=9, buyer_id="buyer-789", items=[BasketItem(catalog_item_id=99, unit_price=Decimal("1"), quantity=1)])
    )

    response = test_client.post("/baskets/9/checkout", json=address_body)

    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
    assert response.json() == {"status": "aborted", "order_id": None, "detail": "Catalog item 99 not found"}
    assert calls == []


def test_checkout_catalog_item_without_picture(test_client, address_body, basket_repository, catalog_repository, calls):
    """Test that a catalog item unusable for an order aborts with 422 instead of a server error."""
    catalog_repository.save(CatalogItem.model_construct(id=3, name="Plain Mug", picture_uri=""))
    basket_repository.save(
        Basket(id=10, buyer_id="buyer-789", items=[BasketItem(catalog_item_id=3, unit_price=Decimal("4"), quantity=1)])
    )

    response = test_client.post("/baskets/10/checkout", json=address_body)

    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
    body = response.json()
    assert body["status"] == "aborted"
    assert body["detail"].startswith("Catalog item 3 cannot be ordered")
    assert calls == []


def test_checkout_delivery_failure(test_client, address_body, mock_delivery_client):
    """Test that a delivery transport failure aborts the checkout without an order."""
    mock_delivery_client.post_delivery.side_effect = requests.ConnectionError("refused")

    response = test_client.post("/baskets/7/checkout", json=address_body)

    assert response.status_code == HTTPStatus.BAD_GATEWAY
    assert response.json()["status"] == "aborted"
    assert test_client.get("/orders/1").status_code == HTTPStatus.NOT_FOUND


def test_checkout_invalid_address(test_client):
    response = test_client.post("/baskets/7/checkout", json={"street": "123 Main St."})
    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY


def test_get_order(test_client, address_body):
    test_client.post("/baskets/7/checkout", json=address_body)

    response = test_client.get("/orders/1")

    assert response.status_code == HTTPStatus.OK
    body = response.json()
    assert body["buyer_id"] == "buyer-123"
    assert body["ship_to_address"]["zipCode"] == "44240"
    assert len(body["order_items"]) == 2
