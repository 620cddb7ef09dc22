"""HTTP client posting delivery details to the warehouse."""

import requests

from .config import WarehouseSettings
from .logger import logger
from .schemas import DeliveryInfo


class DeliveryClient:
    """Posts delivery details to the warehouse delivery endpoint.

    The response status is logged but not validated; transport errors
    (connection failures, timeouts) are raised to the caller.
    """

    def __init__(self, settings: WarehouseSettings):
        self.url = settings.delivery_url
        self.timeout = settings.delivery_timeout
        self.session = requests.Session()

    def post_delivery(self, delivery: DeliveryInfo) -> requests.Response:
        """POST the delivery info as JSON.

        Args:
            delivery (DeliveryInfo): The delivery details to send.

        Returns:
            requests.Response: The warehouse response, uninspected.

        Raises:
            requests.RequestException: If the request could not be completed.
        """
        response = self.session.post(
            self.url,
            json=delivery.model_dump(mode="json", by_alias=True),
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
        )
        logger.info(f"Delivery {delivery.id} posted to warehouse: HTTP {response.status_code}")
        return response

    def close(self) -> None:
        self.session.close()
