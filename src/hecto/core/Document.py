# hecto/core/Document.py
"""hecto.core.Document
======================

The in-memory text buffer: an ordered list of :class:`~hecto.core.Row.Row`
objects, an optional file identity and a dirty flag.

Line-level edits (newline split, end-of-line merge) happen here; intra-line
edits are delegated to :class:`Row`. Positions that fall outside the document
are ignored rather than raising, since cursor motion is responsible for never
producing them.

Persisted layout: UTF-8 text, one line per row, every row terminated by a
single ``\\n`` (including the last one).
"""

from __future__ import annotations

import logging
from typing import Optional

from hecto.core.Position import Position
from hecto.core.Row import Row


def _split_lines(content: str) -> list[str]:
    """Split *content* on ``\\n``, dropping one trailing ``\\r`` per line.

    A final newline does not produce an extra empty line.
    """
    if not content:
        return []
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class Document:
    """Ordered rows plus dirty tracking.

    Attributes:
        rows (list[Row]): Document lines in order.
        filename (Optional[str]): Where :meth:`save` writes; ``None`` until a
            file is opened or a name is chosen through save-as.
    """

    def __init__(
        self, rows: Optional[list[Row]] = None, filename: Optional[str] = None
    ) -> None:
        self.rows: list[Row] = rows if rows is not None else []
        self.filename: Optional[str] = filename
        self._is_dirty: bool = False

    @classmethod
    def open(cls, filename: str) -> Document:
        """Load *filename*, one :class:`Row` per line.

        Raises:
            OSError: The file cannot be read.
            UnicodeDecodeError: The file is not valid UTF-8 text.
        """
        with open(filename, "r", encoding="utf-8", newline="") as f:
            content = f.read()
        rows = [Row(line) for line in _split_lines(content)]
        logging.debug("Document.open: loaded %d rows from '%s'", len(rows), filename)
        return cls(rows, filename)

    def __len__(self) -> int:
        return len(self.rows)

    def is_empty(self) -> bool:
        return not self.rows

    def is_dirty(self) -> bool:
        return self._is_dirty

    def row(self, index: int) -> Optional[Row]:
        if 0 <= index < len(self.rows):
            return self.rows[index]
        return None

    def insert(self, at: Position, char: str) -> None:
        """Insert *char* at *at*; a newline splits the row instead.

        ``at.y == len(self)`` addresses the virtual row past the end, which is
        materialised by this insert. Anything further down is ignored.
        """
        if at.y > len(self.rows):
            return
        self._is_dirty = True
        if char == "\n":
            self._insert_newline(at)
            return
        if at.y == len(self.rows):
            row = Row()
            row.insert(0, char)
            self.rows.append(row)
        else:
            self.rows[at.y].insert(at.x, char)
        logging.debug("Document.insert: %r at (%d, %d)", char, at.x, at.y)

    def _insert_newline(self, at: Position) -> None:
        # Leaves the dirty flag alone; insert() has already set it.
        if at.y == len(self.rows):
            self.rows.append(Row())
            return
        new_row = self.rows[at.y].split(at.x)
        self.rows.insert(at.y + 1, new_row)
        logging.debug("Document: split row %d at %d", at.y, at.x)

    def delete(self, at: Position) -> None:
        """Delete the grapheme at *at*.

        At the end of a row that has a successor, the next row is joined onto
        this one instead.
        """
        if at.y >= len(self.rows):
            return
        self._is_dirty = True
        row = self.rows[at.y]
        if at.x == len(row) and at.y < len(self.rows) - 1:
            next_row = self.rows.pop(at.y + 1)
            row.append(next_row)
            logging.debug("Document: merged row %d into row %d", at.y + 1, at.y)
        else:
            row.delete(at.x)

    def save(self) -> None:
        """Write every row followed by ``\\n`` to :attr:`filename`.

        Does nothing when no filename is set. The dirty flag is cleared only
        after a successful write.

        Raises:
            OSError: The file cannot be created or written.
        """
        if self.filename is None:
            return
        with open(self.filename, "wb") as f:
            for row in self.rows:
                f.write(row.as_bytes())
                f.write(b"\n")
        self._is_dirty = False
        logging.info("Saved %d rows to '%s'", len(self.rows), self.filename)
