# tests/conftest.py
"""Pytest configuration with shared fixtures for the Hecto editor tests."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Callable, Optional
from unittest.mock import MagicMock

import pytest

from hecto.core.Document import Document
from hecto.core.Hecto import Hecto
from hecto.core.Row import Row
from hecto.utils.utils import DEFAULT_CONFIG

from tests.stubs import StubTerminal


# --- Base fixtures for curses and configuration ---
@pytest.fixture
def mock_stdscr() -> MagicMock:
    """Create a mock of the `curses` stdscr for testing UI components.

    Returns:
        MagicMock: A mocked `stdscr` with terminal size set to (24, 80).
    """
    stdscr = MagicMock()
    stdscr.getmaxyx.return_value = (24, 80)  # Typical terminal size
    return stdscr


@pytest.fixture
def mock_config() -> dict[str, Any]:
    """Provide the embedded default configuration as a private copy."""
    return copy.deepcopy(DEFAULT_CONFIG)


@pytest.fixture
def stub_terminal() -> StubTerminal:
    """An 80x24 scripted terminal (22 text rows + status bar + message bar)."""
    return StubTerminal(width=80, height=24)


# --- Hecto fixtures ---
@pytest.fixture
def editor(stub_terminal: StubTerminal, mock_config: dict[str, Any]) -> Hecto:
    """A real `Hecto` session with an empty, unnamed document."""
    return Hecto(stub_terminal, mock_config)


@pytest.fixture
def make_editor(
    stub_terminal: StubTerminal, mock_config: dict[str, Any]
) -> Callable[..., Hecto]:
    """Factory building a session over the given lines.

    Usage: ``make_editor(["ab", "cd"], filename=str(path))``.
    """

    def _make(lines: list[str], filename: Optional[str] = None) -> Hecto:
        document = Document([Row(line) for line in lines], filename)
        return Hecto(stub_terminal, mock_config, document)

    return _make


# --- Filesystem fixtures ---
@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    """A small UTF-8 text file with three lines."""
    path = tmp_path / "sample.txt"
    path.write_text("first line\nsecond\nthird\n", encoding="utf-8")
    return path
