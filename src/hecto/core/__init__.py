# src/hecto/core/__init__.py
"""Public facade for hecto.core: re-export the data model from CamelCase modules.

The editor session itself lives in :mod:`hecto.core.Hecto` and is imported
from there, since it depends on the ``hecto.ui`` layer.
"""

from .Document import Document  # noqa: F401
from .KeyEvent import Key, KeyEvent  # noqa: F401
from .Position import Position  # noqa: F401
from .Row import Row  # noqa: F401
from .TerminalError import TerminalError  # noqa: F401


__all__ = [
    "Document",
    "Key",
    "KeyEvent",
    "Position",
    "Row",
    "TerminalError",
]
