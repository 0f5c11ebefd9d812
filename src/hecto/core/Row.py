# hecto/core/Row.py
"""hecto.core.Row
=================

A single line of document text.

Every index taken or returned by :class:`Row` is a grapheme-cluster index, not
a code-point or byte offset, so a base letter followed by combining marks, an
emoji ZWJ sequence or a flag all occupy exactly one cursor cell. Segmentation is
delegated to the ``grapheme`` library.

Each mutation re-segments the whole line (O(line length)). That is acceptable
for interactive line lengths; the cached length is refreshed before any
mutating method returns.

Rows never hold a line terminator: newlines are structural separators owned by
:class:`hecto.core.Document.Document`.
"""

from __future__ import annotations

import grapheme


class Row:
    """One line of text with an O(1) cached grapheme count.

    Attributes:
        text (str): The stored line, without a trailing newline.
    """

    __slots__ = ("_text", "_len")

    def __init__(self, text: str = "") -> None:
        self._text: str = text
        self._len: int = 0
        self._update_len()

    def __repr__(self) -> str:
        return f"Row({self._text!r})"

    def __len__(self) -> int:
        return self._len

    @property
    def text(self) -> str:
        return self._text

    def is_empty(self) -> bool:
        return self._len == 0

    def _update_len(self) -> None:
        self._len = grapheme.length(self._text)

    def render(self, start: int, end: int) -> str:
        """Return the graphemes in ``[start, end)``, clamped to ``[0, len]``.

        A tab is rendered as a single space so that one grapheme always maps to
        one cursor cell. ``start > end`` yields an empty string.
        """
        start = max(0, start)
        end = max(0, end)
        visible = list(grapheme.graphemes(self._text))[start:end]
        return "".join(" " if g == "\t" else g for g in visible)

    def insert(self, at: int, char: str) -> None:
        """Insert *char* before grapheme *at*; append when *at* is past the end."""
        if at >= self._len:
            self._text += char
        else:
            head = grapheme.slice(self._text, 0, at)
            tail = grapheme.slice(self._text, at)
            self._text = head + char + tail
        self._update_len()

    def delete(self, at: int) -> None:
        """Remove the grapheme at *at*. No-op when *at* is out of range."""
        if at >= self._len or at < 0:
            return
        head = grapheme.slice(self._text, 0, at)
        tail = grapheme.slice(self._text, at + 1)
        self._text = head + tail
        self._update_len()

    def append(self, other: Row) -> None:
        """Concatenate *other*'s text after this row (used by row merges)."""
        self._text = f"{self._text}{other._text}"
        self._update_len()

    def split(self, at: int) -> Row:
        """Truncate this row to its first *at* graphemes and return the rest.

        When *at* is beyond the end the row is left unchanged and the returned
        row is empty.
        """
        at = max(0, at)
        beginning = grapheme.slice(self._text, 0, at)
        remainder = grapheme.slice(self._text, at)
        self._text = beginning
        self._update_len()
        return Row(remainder)

    def as_bytes(self) -> bytes:
        return self._text.encode("utf-8")
