"""
Common Error Constants and Exceptions

Centralized messages so the handler, the demo and the tests agree on wording.
"""

# Cart messages surfaced to observers
ERROR_LOAD_CART_FAILED = "Failed to load cart items"
MESSAGE_ITEM_REMOVED = "Item removed"
TOAST_ERROR_PREFIX = "Error: "

# Store errors
ERROR_STORE_NOT_STARTED = "Store is not bound to an event loop; call start() from the loop first"


class CartFetchError(Exception):
    """Raised by a cart data source when items cannot be fetched."""


class StoreNotStartedError(RuntimeError):
    """Raised when an intent is submitted from outside a loop before start()."""

    def __init__(self, message: str = ERROR_STORE_NOT_STARTED):
        super().__init__(message)
