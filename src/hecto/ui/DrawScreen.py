# hecto/ui/DrawScreen.py
"""DrawScreen.py
========================
DrawScreen renders the Hecto editor through the terminal device.

It is responsible for:
- drawing the horizontally scrolled slice of every visible document row,
- ``~`` filler for rows past the end of the document,
- the version banner, once, when the document is empty,
- the status bar (file name, line count, modified flag, cursor line),
- the message bar while the status message is unexpired,
- placing the cursor relative to the viewport offset.

Text is clipped to the terminal width in cells, so wide glyphs never wrap.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from wcwidth import wcwidth

from hecto import __version__
from hecto.core.Position import Position
from hecto.core.Row import Row


if TYPE_CHECKING:
    from hecto.core.Hecto import Hecto


class DrawScreen:
    """Draws one frame of the editor.

    Attributes:
        editor (Hecto): The session being displayed.
        config (dict): Editor configuration (``colors`` and ``editor`` sections).
        terminal: The terminal device of the session.
        status_fg (str): Status bar foreground colour, ``#rrggbb``.
        status_bg (str): Status bar background colour, ``#rrggbb``.
        filename_width (int): Characters of the file name shown in the status bar.
    """

    def __init__(self, editor: "Hecto", config: dict[str, Any]) -> None:
        self.editor = editor
        self.config = config
        self.terminal = editor.terminal

        colors = config.get("colors", {})
        self.status_fg: str = colors.get("status_fg", "#3f3f3f")
        self.status_bg: str = colors.get("status_bg", "#efefef")
        self.filename_width: int = int(
            config.get("editor", {}).get("filename_width", 20)
        )

    def draw(self) -> None:
        """The main screen drawing method."""
        terminal = self.terminal
        terminal.cursor_hide()
        terminal.cursor_position(Position())
        if self.editor.should_quit:
            terminal.clear_screen()
            terminal.write("Goodbye.")
        else:
            self._draw_rows()
            self._draw_status_bar()
            self._draw_message_bar()
            self._position_cursor()
        terminal.cursor_show()
        terminal.flush()

    def draw_row(self, row: Row, width: int) -> None:
        start = self.editor.offset.x
        text = row.render(start, start + width)
        self.terminal.write(self.truncate_string(text, width))

    def _draw_rows(self) -> None:
        width = self.editor.visible_width
        height = self.editor.visible_height
        document = self.editor.document
        offset_y = self.editor.offset.y

        for terminal_row in range(height):
            self.terminal.cursor_position(Position(0, terminal_row))
            self.terminal.clear_current_line()
            row = document.row(offset_y + terminal_row)
            if row is not None:
                self.draw_row(row, width)
            elif document.is_empty() and terminal_row == height // 3:
                self._draw_welcome_message(width)
            else:
                self.terminal.write("~")

    def _draw_welcome_message(self, width: int) -> None:
        welcome_message = f"Hecto editor -- version {__version__}"
        padding = max(width - len(welcome_message), 0) // 2
        spaces = " " * max(padding - 1, 0)
        self.terminal.write(self.truncate_string(f"~{spaces}{welcome_message}", width))

    def _draw_status_bar(self) -> None:
        """Single-line status bar below the text area.

            <file name> - <n> lines (modified)                <line>/<n>
        """
        width = self.editor.visible_width
        row = self.editor.visible_height
        if not self._has_row(row):
            return
        document = self.editor.document

        modified_indicator = " (modified)" if document.is_dirty() else ""
        file_name = "[No Name]"
        if document.filename:
            file_name = document.filename[: self.filename_width]
        status = f"{file_name} - {len(document)} lines{modified_indicator}"
        line_indicator = f"{self.editor.cursor_position.y + 1}/{len(document)}"

        indicator_width = self.get_string_width(line_indicator)
        status = self.truncate_string(status, max(width - indicator_width, 0))
        status += " " * max(width - self.get_string_width(status) - indicator_width, 0)
        status = self.truncate_string(f"{status}{line_indicator}", width)

        terminal = self.terminal
        terminal.cursor_position(Position(0, row))
        terminal.clear_current_line()
        terminal.set_bg_color(self.status_bg)
        terminal.set_fg_color(self.status_fg)
        terminal.write(status)
        terminal.reset_fg_color()
        terminal.reset_bg_color()

    def _draw_message_bar(self) -> None:
        row = self.editor.visible_height + 1
        if not self._has_row(row):
            return
        self.terminal.cursor_position(Position(0, row))
        self.terminal.clear_current_line()
        message = self.editor.status_message
        if message.text and not message.is_expired(self.editor.message_timeout):
            self.terminal.write(
                self.truncate_string(message.text, self.editor.visible_width)
            )

    def _has_row(self, row: int) -> bool:
        """Terminals shorter than three rows drop the bars, not the text."""
        _, height = self.terminal.size()
        return row < height

    def _position_cursor(self) -> None:
        cursor = self.editor.cursor_position
        offset = self.editor.offset
        screen = Position(max(cursor.x - offset.x, 0), max(cursor.y - offset.y, 0))
        logging.debug(
            f"Positioning cursor: screen=({screen.x}, {screen.y}). "
            f"Logical: ({cursor.x}, {cursor.y}). Offset: ({offset.x}, {offset.y})"
        )
        self.terminal.cursor_position(screen)

    def get_string_width(self, text: str) -> int:
        """Return the display width of *text* in terminal cells."""
        total = 0
        for ch in text:
            w = wcwidth(ch)
            total += w if w > 0 else (1 if w < 0 else 0)
        return total

    def truncate_string(self, s: str, max_width: int) -> str:
        """Return `s` clipped to visual width `max_width`.

        Wide-Unicode characters (e.g. CJK) and other multi-cell glyphs are
        accounted for with :pyfunc:`wcwidth.wcwidth`.
        """
        result: list[str] = []
        consumed = 0

        for ch in s:
            w = wcwidth(ch)
            if w < 0:  # Non-printable → treat as single-cell
                w = 1
            if consumed + w > max_width:  # Would overflow → stop
                break
            result.append(ch)
            consumed += w

        return "".join(result)
