"""Errors raised while checking out a basket."""


class CheckoutError(Exception):
    """Base class for failures that abort a checkout."""


class BasketNotFoundError(CheckoutError):
    """Raised when no basket exists for the requested id."""

    def __init__(self, basket_id: int):
        super().__init__(f"Basket {basket_id} not found")
        self.basket_id = basket_id


class CheckoutValidationError(CheckoutError):
    """Raised when a basket cannot be turned into an order."""


class EmptyBasketError(CheckoutValidationError):
    """Raised when checking out a basket without items."""

    def __init__(self, basket_id: int):
        super().__init__(f"Basket {basket_id} has no items to check out")
        self.basket_id = basket_id


class CatalogItemNotFoundError(CheckoutValidationError):
    """Raised when a basket item references an unknown catalog item."""

    def __init__(self, catalog_item_id: int):
        super().__init__(f"Catalog item {catalog_item_id} not found")
        self.catalog_item_id = catalog_item_id


class InvalidCatalogItemError(CheckoutValidationError):
    """Raised when a catalog item lacks the data an order snapshot needs."""

    def __init__(self, catalog_item_id: int, reason: str):
        super().__init__(f"Catalog item {catalog_item_id} cannot be ordered: {reason}")
        self.catalog_item_id = catalog_item_id


class WarehouseNotificationError(Exception):
    """Raised when the warehouse reservation could not be delivered to Kafka."""
