"""Cart models: immutable items, state snapshots, intents and effects."""
from decimal import Decimal
from typing import Any, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from mvicart.money import round_money, multiply, to_decimal


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ============================================================
# Data
# ============================================================

class CartItem(_Frozen):
    """Single line in the cart."""
    id: str = Field(min_length=1)
    name: str
    price: Decimal = Field(ge=0)
    quantity: int = Field(gt=0)
    image_url: str = ""

    @field_validator("price", mode="before")
    @classmethod
    def _normalize_price(cls, value: Any) -> Any:
        # Floats go through str so 199.99 does not become 199.9899...
        if isinstance(value, float):
            return to_decimal(value)
        return value

    @property
    def total_price(self) -> Decimal:
        """Price for all units, rounded to cents."""
        return round_money(multiply(self.price, self.quantity))


class CartState(_Frozen):
    """
    Snapshot of the cart screen.

    Snapshots are never mutated; use replace() to derive the next one.
    """
    items: Tuple[CartItem, ...] = ()
    is_loading: bool = False
    error_message: Optional[str] = None

    @model_validator(mode="after")
    def _check_unique_ids(self) -> "CartState":
        seen = set()
        for item in self.items:
            if item.id in seen:
                raise ValueError(f"duplicate cart item id: {item.id}")
            seen.add(item.id)
        return self

    def replace(self, **changes: Any) -> "CartState":
        """Return a validated copy with the given fields changed."""
        return type(self)(**{**dict(self), **changes})

    def find_item(self, item_id: str) -> Optional[CartItem]:
        return next((item for item in self.items if item.id == item_id), None)

    def has_item(self, item_id: str) -> bool:
        return self.find_item(item_id) is not None

    @property
    def total_items(self) -> int:
        """Total number of units in the cart."""
        return sum(item.quantity for item in self.items)

    @property
    def subtotal(self) -> Decimal:
        return round_money(sum((item.total_price for item in self.items), Decimal("0")))


# ============================================================
# Intents
# ============================================================

class LoadCart(_Frozen):
    """Fetch the cart items from the data source."""


class RemoveItem(_Frozen):
    """Remove the item with the given id."""
    item_id: str


CartIntent = Union[LoadCart, RemoveItem]


# ============================================================
# Effects
# ============================================================

class ShowToast(_Frozen):
    """Short message for the user."""
    message: str


class NavigateToCheckout(_Frozen):
    """Ask the presentation layer to open the checkout screen."""


CartEffect = Union[ShowToast, NavigateToCheckout]
