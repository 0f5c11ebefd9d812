# hecto/ui/Terminal.py
"""Curses-backed terminal device.

:class:`Terminal` is the only object that talks to curses on behalf of the
editor. It offers a small cursor-addressed drawing interface (move, write,
clear, colours, flush) plus blocking key acquisition, and hides curses key
codes behind :class:`~hecto.core.KeyEvent.KeyEvent`.

Always pair :meth:`Terminal.enter` with :meth:`Terminal.exit` (try/finally).
"""

from __future__ import annotations

import curses
import logging
from typing import Any, Optional

from wcwidth import wcswidth

from hecto.core.KeyEvent import KeyEvent
from hecto.core.Position import Position
from hecto.core.TerminalError import TerminalError
from hecto.ui.KeyBinder import KeyBinder
from hecto.utils.logging_config import KEY_LOGGER
from hecto.utils.utils import hex_to_xterm


class Terminal:
    """
    Put the terminal into an editor-friendly state and draw on it:

    - raw + noecho so Ctrl-S / Ctrl-Q reach the editor instead of flow control,
    - keypad(True) so curses decodes arrows and function keys,
    - a short ESC delay so a lone Escape is reported quickly,
    - screen scrolling disabled at curses level (scrollok(False)).
    """

    STATUS_PAIR = 1

    def __init__(self, stdscr: Any, config: dict[str, Any]) -> None:
        self.stdscr = stdscr
        self.config = config
        self.keybinder = KeyBinder(stdscr, config)
        self._entered: bool = False
        self._position = Position()
        self._fg: int = -1
        self._bg: int = -1
        self._attr: int = curses.A_NORMAL

    def enter(self) -> None:
        try:
            curses.raw()
        except curses.error:
            curses.cbreak()
        curses.noecho()
        self.stdscr.keypad(True)

        try:
            curses.set_escdelay(25)
        except (AttributeError, curses.error):
            logging.debug("Terminal: set_escdelay unavailable")

        try:
            curses.use_default_colors()
        except curses.error:
            logging.debug("Terminal: use_default_colors unavailable")

        self.stdscr.scrollok(False)
        self.stdscr.erase()
        self.stdscr.refresh()
        self._entered = True
        logging.debug("Terminal: entered raw mode.")

    def exit(self) -> None:
        if not self._entered:
            return
        try:
            self.stdscr.keypad(False)
            curses.noraw()
            curses.echo()
        except curses.error as e:
            logging.debug("Terminal: restoring modes failed: %r", e)
        self._entered = False
        logging.debug("Terminal: exited raw mode.")

    # ── geometry & cursor ────────────────────────────────────────────────────

    def size(self) -> tuple[int, int]:
        """Return ``(width, height)`` of the whole terminal in cells."""
        height, width = self.stdscr.getmaxyx()
        return width, height

    def cursor_position(self, position: Position) -> None:
        """Move the output cursor; coordinates outside the screen are clamped."""
        width, height = self.size()
        x = min(max(position.x, 0), max(width - 1, 0))
        y = min(max(position.y, 0), max(height - 1, 0))
        self._position = Position(x, y)
        try:
            self.stdscr.move(y, x)
        except curses.error as e:
            logging.debug("Terminal: move(%d, %d) failed: %r", y, x, e)

    def cursor_hide(self) -> None:
        self._set_cursor_visibility(0)

    def cursor_show(self) -> None:
        self._set_cursor_visibility(1)

    def _set_cursor_visibility(self, visibility: int) -> None:
        try:
            curses.curs_set(visibility)
        except curses.error:
            # Some terminals cannot hide the cursor at all.
            pass

    # ── drawing ──────────────────────────────────────────────────────────────

    def clear_screen(self) -> None:
        self.stdscr.erase()
        self.cursor_position(Position())

    def clear_current_line(self) -> None:
        try:
            self.stdscr.move(self._position.y, 0)
            self.stdscr.clrtoeol()
        except curses.error as e:
            logging.debug("Terminal: clrtoeol on row %d failed: %r", self._position.y, e)
        self._position = Position(0, self._position.y)

    def write(self, text: str) -> None:
        """Draw *text* at the cursor with the current colours and advance the cursor.

        Text past the right edge is clipped.
        """
        if not text:
            return
        width, _ = self.size()
        x, y = self._position.x, self._position.y
        room = width - x
        if room <= 0:
            return
        try:
            self.stdscr.addnstr(y, x, text, room, self._attr)
        except curses.error:
            # Writing the bottom-right cell moves the cursor off-screen and
            # reports an error even though the text was drawn.
            pass
        cells = wcswidth(text)
        if cells < 0:
            cells = len(text)
        self._position = Position(min(x + cells, width - 1), y)

    # ── colours ──────────────────────────────────────────────────────────────

    def set_fg_color(self, color: str) -> None:
        self._fg = hex_to_xterm(color)
        self._apply_colors()

    def set_bg_color(self, color: str) -> None:
        self._bg = hex_to_xterm(color)
        self._apply_colors()

    def reset_fg_color(self) -> None:
        self._fg = -1
        self._apply_colors()

    def reset_bg_color(self) -> None:
        self._bg = -1
        self._apply_colors()

    def _apply_colors(self) -> None:
        if self._fg == -1 and self._bg == -1:
            self._attr = curses.A_NORMAL
            return
        if not curses.has_colors() or getattr(curses, "COLORS", 0) < 256:
            self._attr = curses.A_REVERSE
            return
        try:
            curses.init_pair(self.STATUS_PAIR, self._fg, self._bg)
        except curses.error as exc:
            logging.warning("init_pair failed (%s) – roll back to A_REVERSE", exc)
            self._attr = curses.A_REVERSE
            return
        self._attr = curses.color_pair(self.STATUS_PAIR)

    # ── I/O ──────────────────────────────────────────────────────────────────

    def flush(self) -> None:
        """Push pending drawing to the physical screen.

        Raises:
            TerminalError: curses could not update the terminal.
        """
        try:
            self.stdscr.noutrefresh()
            curses.doupdate()
        except curses.error as e:
            raise TerminalError(f"Could not refresh the screen: {e}") from e

    def read_key(self, window: Optional[Any] = None) -> KeyEvent:
        """Block until the next key press and return it as a :class:`KeyEvent`.

        Raises:
            TerminalError: reading from the terminal failed.
        """
        try:
            raw = self.keybinder.get_key_input(window)
        except curses.error as e:
            raise TerminalError(f"Could not read from the terminal: {e}") from e
        event = self.keybinder.translate(raw)
        KEY_LOGGER.debug("raw=%r -> %s char=%r", raw, event.key.value, event.char)
        return event
