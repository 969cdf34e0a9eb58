"""
mvicart - Intent-State-Effect store with a shopping-cart configuration.

This package contains:
- store: generic single-writer container (intents -> state + effects)
- cart: cart models, data sources and the cart store factory
- money: Decimal helpers for prices
- config / logging / errors: ambient configuration

Note: Imports are lazy so `import mvicart` stays cheap and does not
configure logging before the host application does.
"""

__version__ = "0.1.0"

__all__ = [
    "Store",
    "create_cart_store",
]


def __getattr__(name):
    """Lazy attribute access for the main entry points."""
    if name == "Store":
        from mvicart.store import Store
        return Store
    elif name == "create_cart_store":
        from mvicart.cart import create_cart_store
        return create_cart_store
    raise AttributeError(f"module 'mvicart' has no attribute '{name}'")
