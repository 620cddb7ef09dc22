"""Runtime configuration for the checkout service."""

import os

from pydantic import BaseModel, Field


class WarehouseSettings(BaseModel):
    """Connection settings for the warehouse integrations.

    Attributes:
        kafka_bootstrap_servers (str): Comma-separated list of Kafka broker addresses.
        warehouse_topic (str): Topic receiving stock reservation notifications.
        message_timeout_ms (int): Kafka delivery timeout for a single message.
        flush_timeout (float): Seconds to wait for the reservation to be acknowledged.
        delivery_url (str): Warehouse endpoint receiving delivery details.
        delivery_timeout (float): Seconds before the delivery POST times out.
        catalog_base_url (str): Base URL substituted into catalog picture URIs.
    """

    kafka_bootstrap_servers: str = "kafka:9092"
    warehouse_topic: str = "warehouse.reservations"
    message_timeout_ms: int = Field(default=5000, gt=0)
    flush_timeout: float = Field(default=10.0, gt=0)
    delivery_url: str = "http://warehouse:8000/api/orders"
    delivery_timeout: float = Field(default=10.0, gt=0)
    catalog_base_url: str = "http://localhost:5106"

    @classmethod
    def from_env(cls) -> "WarehouseSettings":
        """Build settings from environment variables, falling back to defaults.

        Returns:
            WarehouseSettings: The resolved settings.
        """
        defaults = cls()
        return cls(
            kafka_bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", defaults.kafka_bootstrap_servers),
            warehouse_topic=os.getenv("WAREHOUSE_TOPIC", defaults.warehouse_topic),
            message_timeout_ms=int(os.getenv("KAFKA_MESSAGE_TIMEOUT_MS", defaults.message_timeout_ms)),
            flush_timeout=float(os.getenv("KAFKA_FLUSH_TIMEOUT", defaults.flush_timeout)),
            delivery_url=os.getenv("WAREHOUSE_DELIVERY_URL", defaults.delivery_url),
            delivery_timeout=float(os.getenv("WAREHOUSE_DELIVERY_TIMEOUT", defaults.delivery_timeout)),
            catalog_base_url=os.getenv("CATALOG_BASE_URL", defaults.catalog_base_url),
        )
