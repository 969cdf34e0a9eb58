"""Environment-driven configuration for the cart store."""
import os

from mvicart.logging import get_logger

logger = get_logger(__name__)

DEFAULT_FETCH_DELAY_SECONDS = 1.5


def get_fetch_delay() -> float:
    """
    Get the simulated fetch latency of the fake repository, in seconds.

    Reads CART_FETCH_DELAY_SECONDS at call time so tests can patch the
    environment. Invalid or negative values fall back to the default.
    """
    raw = os.environ.get("CART_FETCH_DELAY_SECONDS", "").strip()
    if not raw:
        return DEFAULT_FETCH_DELAY_SECONDS

    try:
        delay = float(raw)
    except ValueError:
        logger.warning(f"Invalid CART_FETCH_DELAY_SECONDS={raw!r}, using {DEFAULT_FETCH_DELAY_SECONDS}")
        return DEFAULT_FETCH_DELAY_SECONDS

    if delay < 0:
        logger.warning(f"Negative CART_FETCH_DELAY_SECONDS={raw!r}, using {DEFAULT_FETCH_DELAY_SECONDS}")
        return DEFAULT_FETCH_DELAY_SECONDS

    return delay
