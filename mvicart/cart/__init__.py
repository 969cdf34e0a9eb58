"""Cart package: models, data sources, and the cart store."""
from .models import (
    CartEffect,
    CartIntent,
    CartItem,
    CartState,
    LoadCart,
    NavigateToCheckout,
    RemoveItem,
    ShowToast,
)
from .repository import CartDataSource, FailingCartRepository, FakeCartRepository
from .service import CartIntentHandler, create_cart_store, reject_unknown_removal

__all__ = [
    "CartDataSource",
    "CartEffect",
    "CartIntent",
    "CartIntentHandler",
    "CartItem",
    "CartState",
    "FailingCartRepository",
    "FakeCartRepository",
    "LoadCart",
    "NavigateToCheckout",
    "RemoveItem",
    "ShowToast",
    "create_cart_store",
    "reject_unknown_removal",
]
