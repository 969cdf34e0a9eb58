"""Store package: generic Intent-State-Effect container and middlewares."""
from .middleware import Middleware, apply_middlewares, log_intents
from .store import Handler, Store, StoreScope

__all__ = [
    "Handler",
    "Middleware",
    "Store",
    "StoreScope",
    "apply_middlewares",
    "log_intents",
]
