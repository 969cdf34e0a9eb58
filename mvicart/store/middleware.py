"""Intent middlewares: pre-processing steps run before the intent handler."""
from typing import Callable, Optional, Sequence, TypeVar

from mvicart.logging import get_logger

logger = get_logger(__name__)

IntentT = TypeVar("IntentT")
StateT = TypeVar("StateT")

# (intent, current state) -> intent to handle, or None to discard it
Middleware = Callable[[IntentT, StateT], Optional[IntentT]]


def apply_middlewares(
    middlewares: Sequence[Middleware],
    intent: IntentT,
    state: StateT,
) -> Optional[IntentT]:
    """
    Run an intent through middlewares in order.

    Each middleware sees the output of the previous one. The chain stops at
    the first middleware returning None.
    """
    current = intent
    for middleware in middlewares:
        current = middleware(current, state)
        if current is None:
            return None
    return current


def log_intents(intent: IntentT, state: StateT) -> IntentT:
    """Middleware that logs every intent at DEBUG and lets it through."""
    logger.debug(f"Intent received: {intent!r}")
    return intent


__all__ = ["Middleware", "apply_middlewares", "log_intents"]
