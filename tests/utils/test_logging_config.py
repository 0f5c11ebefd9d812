# tests/utils/test_logging_config.py
"""Unit tests for logging configuration utility.
=================================================

Tests for the logging setup utility in `hecto.utils.logging_config`.

This module verifies that `setup_logging`:
- Creates rotating file handlers for the main log and a separate error log
  when `separate_error_log` is enabled.
- Honors the configured levels for each handler.
- Adds a console handler only when `log_to_console` is set.
- Routes key tracing to keytrace.log only when HECTO_KEYTRACE is set.

Log files are written into a temporary directory.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Generator

import pytest

from hecto.utils import logging_config


@pytest.fixture(autouse=True)
def restore_logging(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Generator[None, None, None]:
    """Run each test in tmp_path and put the root logger back afterwards."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(logging_config.KEYTRACE_ENV_VAR, raising=False)
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield
    for handler in root.handlers + logging_config.KEY_LOGGER.handlers:
        handler.close()
    root.handlers = saved_handlers
    root.setLevel(saved_level)
    logging_config.KEY_LOGGER.handlers = []


def test_setup_logging_creates_handlers(tmp_path: Path) -> None:
    """`setup_logging` should add rotating file handlers with proper levels.

    Scenario:
    - Console logging is disabled.
    - Separate error log is requested.
    - File handler level is INFO.
    """
    logging_config.setup_logging(
        {
            "logging": {
                "file_level": "INFO",
                "console_level": "ERROR",
                "log_to_console": False,
                "separate_error_log": True,
            }
        }
    )

    root = logging.getLogger()
    names = {type(h).__name__ for h in root.handlers}

    assert "RotatingFileHandler" in names
    assert len(root.handlers) == 2
    assert root.handlers[0].level == logging.INFO
    assert root.handlers[1].level == logging.ERROR
    assert (tmp_path / "editor.log").exists()
    assert (tmp_path / "error.log").exists()


def test_console_handler_is_optional() -> None:
    logging_config.setup_logging({"logging": {"log_to_console": True, "console_level": "error"}})

    root = logging.getLogger()
    assert len(root.handlers) == 2
    console = root.handlers[1]
    assert type(console) is logging.StreamHandler
    assert console.level == logging.ERROR


def test_default_config_logs_to_file_only() -> None:
    logging_config.setup_logging()

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], logging.handlers.RotatingFileHandler)
    assert root.level == logging.DEBUG


def test_log_dir_is_created(tmp_path: Path) -> None:
    log_dir = tmp_path / "logs" / "nested"
    logging_config.setup_logging({"logging": {"log_dir": str(log_dir)}})
    assert (log_dir / "editor.log").exists()


def test_key_tracing_disabled_by_default() -> None:
    logging_config.setup_logging({})

    key_logger = logging_config.KEY_LOGGER
    assert key_logger.disabled
    assert not key_logger.propagate
    assert [type(h) for h in key_logger.handlers] == [logging.NullHandler]


def test_key_tracing_enabled_by_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv(logging_config.KEYTRACE_ENV_VAR, "yes")
    logging_config.setup_logging({})

    key_logger = logging_config.KEY_LOGGER
    assert not key_logger.disabled
    assert isinstance(key_logger.handlers[0], logging.handlers.RotatingFileHandler)

    key_logger.debug("raw=%r", "x")
    key_logger.handlers[0].flush()
    assert "raw='x'" in (tmp_path / "keytrace.log").read_text(encoding="utf-8")
