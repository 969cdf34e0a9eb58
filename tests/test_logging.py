"""Tests for logging helpers"""
import logging
import os
import subprocess
import sys
from pathlib import Path
from unittest.mock import patch

from mvicart.logging import (
    configure_logging,
    get_logger,
    sanitize_id_for_logging,
    sanitize_string_for_logging,
)

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def test_get_logger_is_cached():
    assert get_logger("mvicart.test") is get_logger("mvicart.test")
    assert isinstance(get_logger("mvicart.test"), logging.Logger)


def test_library_logger_has_null_handler():
    handlers = logging.getLogger("mvicart").handlers
    assert any(isinstance(handler, logging.NullHandler) for handler in handlers)


def test_import_leaves_host_logging_alone():
    """A host importing the package still owns basicConfig"""
    code = (
        "import logging, mvicart.cart, mvicart.store\n"
        "assert not logging.getLogger().handlers\n"
        "logging.basicConfig(level=logging.DEBUG, format='HOST %(message)s')\n"
        "logging.getLogger('host').debug('hello')\n"
    )
    env = {**os.environ, "PYTHONPATH": str(PROJECT_ROOT)}
    result = subprocess.run(
        [sys.executable, "-c", code],
        capture_output=True,
        text=True,
        env=env,
        cwd=PROJECT_ROOT,
        timeout=30,
    )

    assert result.returncode == 0, result.stderr
    assert "HOST hello" in result.stderr


def test_configure_logging_installs_stdout_handler():
    root = logging.getLogger()
    level = root.level
    with patch.object(root, "handlers", []):
        with patch.dict(os.environ, {"LOG_LEVEL": "DEBUG"}):
            installed = configure_logging()
        handlers = list(root.handlers)
    root.setLevel(level)

    assert installed is True
    assert len(handlers) == 1
    assert handlers[0].stream is sys.stdout


def test_configure_logging_keeps_existing_setup():
    root = logging.getLogger()
    existing = logging.NullHandler()
    with patch.object(root, "handlers", [existing]):
        assert configure_logging() is False
        assert root.handlers == [existing]


def test_sanitize_id_escapes_newlines():
    """Injected newlines cannot forge a second log line"""
    assert sanitize_id_for_logging("2\nERROR fake") == "2\\nERROR fake"


def test_sanitize_id_truncates():
    assert sanitize_id_for_logging("x" * 40) == "x" * 16
    assert sanitize_id_for_logging(None) == "N/A"
    assert sanitize_id_for_logging("") == "N/A"


def test_sanitize_string():
    assert sanitize_string_for_logging("short") == "short"
    assert sanitize_string_for_logging("a" * 60) == "a" * 50 + "..."
    assert sanitize_string_for_logging("tab\there\x00") == "tab\\there"
    assert sanitize_string_for_logging(None) == "N/A"
