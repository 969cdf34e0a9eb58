"""Cart data sources: the fetch contract and a fake in-memory repository."""
import asyncio
from typing import Optional, Protocol, Sequence, runtime_checkable

from mvicart.config import get_fetch_delay
from mvicart.errors import CartFetchError
from mvicart.logging import get_logger

from .models import CartItem

logger = get_logger(__name__)


@runtime_checkable
class CartDataSource(Protocol):
    """Anything that can fetch the current cart items."""

    async def fetch_items(self) -> Sequence[CartItem]:
        ...


DEFAULT_CART_ITEMS: tuple[CartItem, ...] = (
    CartItem(
        id="1",
        name="Wireless Headphones",
        price="199.99",
        quantity=1,
        image_url="https://example.com/headphones.jpg",
    ),
    CartItem(
        id="2",
        name="Smart Watch",
        price="299.99",
        quantity=1,
        image_url="https://example.com/watch.jpg",
    ),
    CartItem(
        id="3",
        name="Bluetooth Speaker",
        price="129.99",
        quantity=2,
        image_url="https://example.com/speaker.jpg",
    ),
)


class FakeCartRepository:
    """
    In-memory stand-in for a cart backend.

    Returns a fixed catalogue after a simulated network delay. Never fails.
    """

    def __init__(
        self,
        delay: Optional[float] = None,
        items: Optional[Sequence[CartItem]] = None,
    ):
        self.delay = get_fetch_delay() if delay is None else delay
        self._items = tuple(DEFAULT_CART_ITEMS if items is None else items)
        self.fetch_count = 0

    async def fetch_items(self) -> Sequence[CartItem]:
        self.fetch_count += 1
        logger.debug(f"Fetching cart items (delay={self.delay}s, call #{self.fetch_count})")
        if self.delay:
            await asyncio.sleep(self.delay)
        return list(self._items)


class FailingCartRepository:
    """Data source that always fails; used by the demo and tests."""

    def __init__(self, message: str = "Cart backend unavailable", delay: float = 0):
        self.message = message
        self.delay = delay

    async def fetch_items(self) -> Sequence[CartItem]:
        if self.delay:
            await asyncio.sleep(self.delay)
        raise CartFetchError(self.message)


__all__ = [
    "CartDataSource",
    "DEFAULT_CART_ITEMS",
    "FailingCartRepository",
    "FakeCartRepository",
]
