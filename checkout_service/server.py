"""Checkout Service Server."""

from http import HTTPStatus

import requests
from confluent_kafka.admin import AdminClient
from fastapi import APIRouter, Depends, FastAPI, HTTPException
from fastapi.responses import JSONResponse

from .config import WarehouseSettings
from .exceptions import BasketNotFoundError, CheckoutValidationError
from .logger import logger
from .orders import OrderService
from .repositories import InMemoryBasketRepository, InMemoryCatalogRepository, InMemoryOrderRepository
from .schemas import Address, CheckoutResponse, CheckoutStatus, Order

app = FastAPI(title="Checkout Service")
router = APIRouter()

settings = WarehouseSettings.from_env()
basket_repository = InMemoryBasketRepository()
catalog_repository = InMemoryCatalogRepository()
order_repository = InMemoryOrderRepository()
order_service = OrderService(basket_repository, catalog_repository, order_repository, settings)


def get_order_service() -> OrderService:
    """Dependency returning the service wired to the module-level stores."""
    return order_service


@router.get("/health")
def health_check():
    """Check the health status of the service.

    Returns:
        dict: Contains Kafka connection status.
    """
    return {"kafka": _check_kafka_connection()}


@router.get("/health/ready")
def readiness_check():
    """Check if the service is ready to accept traffic.

    Returns:
        dict: Service readiness status and Kafka connection status.
    """
    kafka_ok = _check_kafka_connection()
    return {"status": "ready" if kafka_ok else "not_ready", "kafka": kafka_ok}


@router.post("/baskets/{basket_id}/checkout", status_code=HTTPStatus.CREATED, response_model=CheckoutResponse)
async def checkout(basket_id: int, address: Address, service: OrderService = Depends(get_order_service)):
    """Check out a basket and hand the resulting order to the warehouse.

    Args:
        basket_id (int): The basket to check out.
        address (Address): Shipping address for the order.

    Returns:
        CheckoutResponse: Outcome of the checkout and the new order id.
    """
    logger.info(f"Checkout requested for basket {basket_id}")
    try:
        result = await service.place_order(basket_id, address)
    except BasketNotFoundError as e:
        return _aborted(HTTPStatus.NOT_FOUND, str(e))
    except CheckoutValidationError as e:
        logger.warning(f"Checkout of basket {basket_id} rejected: {e}")
        return _aborted(HTTPStatus.UNPROCESSABLE_ENTITY, str(e))
    except requests.RequestException as e:
        logger.error(f"Delivery post failed for basket {basket_id}: {e}")
        return _aborted(HTTPStatus.BAD_GATEWAY, f"Warehouse delivery failed: {e}")

    return CheckoutResponse(status=result.status, order_id=result.order.id, detail=result.error)


@router.get("/orders/{order_id}", response_model=Order)
async def get_order(order_id: int, service: OrderService = Depends(get_order_service)):
    """Return a placed order.

    Raises:
        HTTPException: 404 if the order does not exist.
    """
    order = await service.order_repository.get(order_id)
    if order is None:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=f"Order {order_id} not found")
    return order


def _aborted(status_code: int, detail: str) -> JSONResponse:
    body = CheckoutResponse(status=CheckoutStatus.ABORTED, detail=detail)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _check_kafka_connection() -> bool:
    """Check if Kafka connection is available.

    Returns:
        bool: True if Kafka is accessible, False otherwise.
    """
    try:
        admin = AdminClient({"bootstrap.servers": settings.kafka_bootstrap_servers})
        return bool(admin.list_topics(timeout=5))
    except Exception as e:
        logger.error(f"Kafka connection failed: {e}")
        return False


app.include_router(router)
logger.info("API router mounted.")
