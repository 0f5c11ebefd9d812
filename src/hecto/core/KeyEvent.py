# hecto/core/KeyEvent.py
"""Logical key events consumed by the editor's input state machine.

The terminal layer (:mod:`hecto.ui.KeyBinder`) turns raw curses codes into
these events, so the core never deals with terminal-specific key codes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Key(Enum):
    CHAR = "char"
    ENTER = "enter"
    QUIT = "quit"
    SAVE = "save"
    DELETE = "delete"
    BACKSPACE = "backspace"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    END = "end"
    ESCAPE = "escape"
    RESIZE = "resize"
    UNKNOWN = "unknown"


# Keys handled by the cursor-motion rules.
MOTION_KEYS = frozenset(
    {
        Key.UP,
        Key.DOWN,
        Key.LEFT,
        Key.RIGHT,
        Key.PAGE_UP,
        Key.PAGE_DOWN,
        Key.HOME,
        Key.END,
    }
)


@dataclass(frozen=True)
class KeyEvent:
    """A single key press. ``char`` is only set for :attr:`Key.CHAR`."""

    key: Key
    char: Optional[str] = None

    @classmethod
    def of_char(cls, char: str) -> KeyEvent:
        return cls(Key.CHAR, char)
