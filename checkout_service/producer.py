"""Kafka producer for publishing warehouse stock reservations."""

from typing import Sequence

from confluent_kafka import KafkaException, Producer

from .config import WarehouseSettings
from .exceptions import WarehouseNotificationError
from .logger import logger
from .schemas import WarehouseOrderInfo, WarehouseOrderInfoList


class WarehouseProducer:
    """Kafka producer notifying the warehouse of the stock an order reserves.

    One producer is created per checkout and closed once the reservation has
    been sent, so every publish waits for its own delivery report.

    Attributes:
        _producer: The underlying Kafka producer instance.
        _topic: Topic the reservations are published to.
    """

    def __init__(self, settings: WarehouseSettings):
        """Initialize the Kafka producer from the warehouse settings.

        Args:
            settings (WarehouseSettings): Bootstrap servers, topic and timeouts.
        """
        self._topic = settings.warehouse_topic
        self._flush_timeout = settings.flush_timeout
        self._delivery_error = None
        self._producer = Producer(
            {
                "bootstrap.servers": settings.kafka_bootstrap_servers,
                "message.timeout.ms": settings.message_timeout_ms,
                "acks": "all",
            }
        )

    @property
    def producer(self):
        """Get the underlying Kafka producer instance.

        Returns:
            Producer: The Kafka producer instance.
        """
        return self._producer

    def _delivery_callback(self, err, msg):
        """Callback function for message delivery reports.

        Args:
            err: Error that occurred during message delivery, if any.
            msg: Message that was delivered or failed.
        """
        if err:
            self._delivery_error = err
            logger.error(f"Reservation failed delivery: {err}")
        else:
            logger.debug(f"Reservation delivered to {msg.topic()} [p:{msg.partition()}] @ {msg.offset()}")

    def publish_reservation(self, buyer_id: str, items: Sequence[WarehouseOrderInfo]) -> None:
        """Publish the reserved quantities and wait for the delivery report.

        Args:
            buyer_id (str): Buyer placing the order, used as the message key.
            items (Sequence[WarehouseOrderInfo]): Catalog item ids and quantities.

        Raises:
            WarehouseNotificationError: If the message could not be produced or delivered.
        """
        self._delivery_error = None
        try:
            self._producer.produce(
                topic=self._topic,
                key=buyer_id.encode("utf-8"),
                value=WarehouseOrderInfoList.dump_json(list(items), by_alias=True),
                on_delivery=self._delivery_callback,
            )
        except (BufferError, KafkaException) as e:
            raise WarehouseNotificationError(f"Could not produce reservation: {e}") from e

        remaining = self._producer.flush(self._flush_timeout)
        if remaining > 0:
            raise WarehouseNotificationError(f"{remaining} reservation(s) still pending after {self._flush_timeout}s")
        if self._delivery_error is not None:
            raise WarehouseNotificationError(f"Reservation delivery failed: {self._delivery_error}")

    def close(self) -> None:
        """Flush anything still queued and release the producer."""
        remaining = self._producer.flush(0)
        if remaining > 0:
            logger.warning(f"{remaining} messages dropped on close")
