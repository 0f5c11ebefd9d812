# hecto/core/Position.py
"""Document coordinates shared by the cursor and the viewport offset."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """A document coordinate.

    ``y`` is a row index; ``y == len(document)`` is the virtual row just past
    the last one. ``x`` is a grapheme offset within the row; ``x == len(row)``
    is the end of the line.
    """

    x: int = 0
    y: int = 0
