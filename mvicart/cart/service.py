"""Cart store configuration: middleware, intent handler and factory."""
from typing import Optional

from mvicart.errors import ERROR_LOAD_CART_FAILED, MESSAGE_ITEM_REMOVED, TOAST_ERROR_PREFIX
from mvicart.logging import get_logger, sanitize_id_for_logging, sanitize_string_for_logging
from mvicart.store import Store, StoreScope

from .models import (
    CartEffect,
    CartIntent,
    CartState,
    LoadCart,
    RemoveItem,
    ShowToast,
)
from .repository import CartDataSource, FakeCartRepository

logger = get_logger(__name__)

CartScope = StoreScope[CartState, CartEffect]
CartStore = Store[CartIntent, CartState, CartEffect]


def reject_unknown_removal(intent: CartIntent, state: CartState) -> Optional[CartIntent]:
    """Middleware dropping RemoveItem for ids that are not in the cart."""
    if isinstance(intent, RemoveItem) and not state.has_item(intent.item_id):
        logger.debug(f"Ignoring removal of unknown item {sanitize_id_for_logging(intent.item_id)}")
        return None
    return intent


class CartIntentHandler:
    """
    Turns cart intents into state transitions and effects.

    - LoadCart: loading -> fetched items, or loading -> error message + toast
    - RemoveItem: filter the item out + "Item removed" toast
    """

    def __init__(self, data_source: CartDataSource):
        self.data_source = data_source

    async def __call__(self, intent: CartIntent, scope: CartScope) -> None:
        if isinstance(intent, LoadCart):
            await self._load_cart(scope)
        elif isinstance(intent, RemoveItem):
            self._remove_item(intent.item_id, scope)
        else:
            logger.warning(f"Unsupported cart intent: {type(intent).__name__}")

    async def _load_cart(self, scope: CartScope) -> None:
        scope.update_state(scope.state.replace(is_loading=True, error_message=None))

        try:
            items = await self.data_source.fetch_items()
            loaded = scope.state.replace(items=items, is_loading=False, error_message=None)
        except Exception as e:
            logger.warning(f"Failed to load cart items: {sanitize_string_for_logging(str(e))}", exc_info=True)
            scope.update_state(scope.state.replace(is_loading=False, error_message=ERROR_LOAD_CART_FAILED))
            scope.emit(ShowToast(message=f"{TOAST_ERROR_PREFIX}{e}"))
            return

        scope.update_state(loaded)
        logger.info(f"Cart loaded: {len(loaded.items)} items, subtotal {loaded.subtotal}")

    def _remove_item(self, item_id: str, scope: CartScope) -> None:
        state = scope.state
        remaining = tuple(item for item in state.items if item.id != item_id)
        if len(remaining) == len(state.items):
            # Nothing to remove; no toast either
            return

        scope.update_state(state.replace(items=remaining, error_message=None))
        scope.emit(ShowToast(message=MESSAGE_ITEM_REMOVED))
        logger.info(f"Removed cart item {sanitize_id_for_logging(item_id)}")


def create_cart_store(
    data_source: Optional[CartDataSource] = None,
    *,
    validate_removals: bool = True,
    name: str = "cart",
) -> CartStore:
    """
    Build the cart store.

    Args:
        data_source: Where LoadCart fetches items from (default: FakeCartRepository)
        validate_removals: Drop RemoveItem for unknown ids before the handler

    Returns:
        Store starting from an empty CartState
    """
    if data_source is None:
        data_source = FakeCartRepository()

    middlewares = [reject_unknown_removal] if validate_removals else []
    return Store(
        initial_state=CartState(),
        handler=CartIntentHandler(data_source),
        middlewares=middlewares,
        name=name,
    )
