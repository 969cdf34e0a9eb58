"""
Logging helpers for mvicart.

Library modules only ask for loggers:
    from mvicart.logging import get_logger
    logger = get_logger(__name__)

Importing mvicart never touches the root logger; the "mvicart" logger gets a
NullHandler and the host application decides where records go. Entry points
that own the process (python -m mvicart) call configure_logging().
"""

import logging
import os
import sys
from functools import cache

LIBRARY_LOGGER = "mvicart"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"

logging.getLogger(LIBRARY_LOGGER).addHandler(logging.NullHandler())


def _level_from_env() -> int:
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def configure_logging(level: int | None = None) -> bool:
    """
    Send records to stdout for scripts that own the process.

    Leaves an already configured root logger alone.

    Args:
        level: Log level; defaults to LOG_LEVEL from the environment

    Returns:
        True if a handler was installed
    """
    root = logging.getLogger()
    if root.handlers:
        return False

    if level is None:
        level = _level_from_env()

    handler = logging.StreamHandler(sys.stdout)
    use_simple = os.environ.get("MVICART_LOG_FORMAT", "").lower() == "simple"
    handler.setFormatter(logging.Formatter(LOG_FORMAT_SIMPLE if use_simple else LOG_FORMAT))

    root.setLevel(level)
    root.addHandler(handler)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    return True


@cache
def get_logger(name: str) -> logging.Logger:
    """Get a logger, typically for __name__."""
    return logging.getLogger(name)


def _escape_log_injection(value: str) -> str:
    # CWE-117: no forged lines
    return (
        value.replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\x00", "")
    )


def sanitize_id_for_logging(id_value: str | None, max_length: int = 16) -> str:
    """Escape and truncate a caller-provided item id; "N/A" when empty."""
    if not id_value:
        return "N/A"
    return _escape_log_injection(str(id_value))[:max_length]


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """
    Escape free text (error details, toast messages) before logging it.

    Text longer than max_length is cut and marked with "...".
    """
    if not value:
        return "N/A"
    safe_value = _escape_log_injection(str(value))
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."


__all__ = [
    "LOG_FORMAT",
    "LOG_FORMAT_SIMPLE",
    "configure_logging",
    "get_logger",
    "sanitize_id_for_logging",
    "sanitize_string_for_logging",
]
