# hecto/core/Hecto.py
"""hecto.core.Hecto
===================

The editor session: one :class:`Hecto` instance owns the document, the cursor,
the viewport offset, the transient status message and the quit-confirmation
counter, and runs the synchronous read → handle → render loop.

Loop contract
-------------
Each iteration renders the screen, stops if a quit was accepted, then blocks
for exactly one key event and processes it completely (document mutation,
cursor motion, viewport update) before the next render.

Quit confirmation
-----------------
Quitting a modified document needs ``editor.quit_times`` consecutive quit
presses (3 by default). Any other key in between starts the count over.

Errors
------
* Load failures degrade to an empty document plus an error status message.
* Save failures are logged and reported in the status bar.
* :class:`~hecto.core.TerminalError.TerminalError` is fatal: :meth:`Hecto.die`
  clears the screen and re-raises it to the caller.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, NoReturn, Optional

import grapheme

from hecto.core.Document import Document
from hecto.core.KeyEvent import MOTION_KEYS, Key, KeyEvent
from hecto.core.Position import Position
from hecto.core.TerminalError import TerminalError
from hecto.ui.DrawScreen import DrawScreen
from hecto.ui.KeyBinder import describe_binding


QUIT_TIMES = 3
MESSAGE_TIMEOUT = 5.0


@dataclass
class StatusMessage:
    """Message bar text plus the moment it was set."""

    text: str = ""
    time: float = field(default_factory=time.monotonic)

    def is_expired(self, timeout: float) -> bool:
        return time.monotonic() - self.time >= timeout


class Hecto:
    """Single-document editor session.

    Attributes:
        terminal: The terminal device (see :class:`hecto.ui.Terminal.Terminal`).
        config (dict): Merged application configuration.
        document (Document): The buffer being edited.
        cursor_position (Position): Cursor in document coordinates
            (grapheme column, row).
        offset (Position): Document coordinate shown in the top-left cell.
        status_message (StatusMessage): Current message bar content.
        quit_times (int): Remaining quit presses before a modified document
            is abandoned.
        should_quit (bool): Set once a quit has been accepted.
    """

    def __init__(
        self,
        terminal: Any,
        config: dict[str, Any],
        document: Optional[Document] = None,
    ) -> None:
        self.terminal = terminal
        self.config = config

        editor_config = config.get("editor", {})
        self.quit_threshold: int = int(editor_config.get("quit_times", QUIT_TIMES))
        self.message_timeout: float = float(
            editor_config.get("message_timeout", MESSAGE_TIMEOUT)
        )

        self.quit_label = describe_binding(config, "quit", "Ctrl-Q")
        self.save_label = describe_binding(config, "save_file", "Ctrl-S")

        self.document: Document = document if document is not None else Document()
        self.cursor_position = Position()
        self.offset = Position()
        self.status_message = StatusMessage(self.help_message())
        self.quit_times: int = self.quit_threshold
        self.should_quit: bool = False

        self.drawer = DrawScreen(self, config)
        logging.debug(
            "Hecto session created (quit_times=%d, message_timeout=%.1fs)",
            self.quit_threshold,
            self.message_timeout,
        )

    def help_message(self) -> str:
        return f"HELP: {self.save_label} = save | {self.quit_label} = quit"

    def set_status(self, text: str) -> None:
        self.status_message = StatusMessage(text)

    def preload_cli_document(self, filename: str) -> None:
        """Open *filename*; on failure keep an empty, unnamed document.

        A missing or unreadable file is not fatal: the failure is shown in the
        message bar and editing starts from scratch.
        """
        try:
            self.document = Document.open(filename)
        except (OSError, UnicodeDecodeError) as e:
            logging.error("Could not open '%s': %s", filename, e)
            self.document = Document()
            self.set_status(f"ERR: Could not open file: {filename}")
            return
        logging.info("Opened '%s' (%d lines)", filename, len(self.document))

    # ── geometry ─────────────────────────────────────────────────────────────

    @property
    def visible_width(self) -> int:
        width, _ = self.terminal.size()
        return max(width, 1)

    @property
    def visible_height(self) -> int:
        """Rows available for text: the terminal minus status and message bars."""
        _, height = self.terminal.size()
        return max(height - 2, 1)

    # ── main loop ────────────────────────────────────────────────────────────

    def run(self) -> None:
        """Run until a quit is accepted.

        Raises:
            TerminalError: the terminal failed; the screen has been cleared.
        """
        logging.info("Editor main loop started.")
        while True:
            try:
                self.refresh_screen()
                if self.should_quit:
                    break
                self.process_keypress()
            except TerminalError as error:
                self.die(error)
        logging.info("Editor main loop finished.")

    def refresh_screen(self) -> None:
        self.drawer.draw()

    def process_keypress(self) -> None:
        event = self.terminal.read_key()
        self.handle_key(event)

    def handle_key(self, event: KeyEvent) -> None:
        """Apply one key event to the session."""
        key = event.key
        if key is Key.QUIT:
            self.handle_quit()
            return

        if key is Key.SAVE:
            self.save_file()
        elif key is Key.ENTER:
            self.insert_char("\n")
        elif key is Key.CHAR and event.char:
            self.insert_char(event.char)
        elif key is Key.DELETE:
            self.document.delete(self.cursor_position)
        elif key is Key.BACKSPACE:
            if self.cursor_position.x > 0 or self.cursor_position.y > 0:
                self.move_cursor(Key.LEFT)
                self.document.delete(self.cursor_position)
        elif key in MOTION_KEYS:
            self.move_cursor(key)

        self.scroll()
        if self.quit_times < self.quit_threshold:
            self.quit_times = self.quit_threshold
            self.set_status("")

    def handle_quit(self) -> None:
        if self.quit_times > 0 and self.document.is_dirty():
            self.quit_times -= 1
            if self.quit_times > 0:
                self.set_status(
                    f"WARN: File has unsaved changes! Press {self.quit_label} "
                    f"{self.quit_times} more times to quit."
                )
                logging.debug("Quit refused, %d presses left", self.quit_times)
                return
        logging.info("Quit accepted (dirty=%s)", self.document.is_dirty())
        self.should_quit = True

    def insert_char(self, char: str) -> None:
        """Insert at the cursor and step right past the new text."""
        row = self.document.row(self.cursor_position.y)
        length_before = len(row) if row is not None else 0
        self.document.insert(self.cursor_position, char)
        if char != "\n" and row is not None and len(row) == length_before:
            # a combining mark joined the preceding grapheme
            return
        self.move_cursor(Key.RIGHT)

    # ── cursor & viewport ────────────────────────────────────────────────────

    def move_cursor(self, key: Key) -> None:
        x, y = self.cursor_position.x, self.cursor_position.y
        height = len(self.document)
        visible_height = self.visible_height
        row = self.document.row(y)
        width = len(row) if row is not None else 0

        if key is Key.UP:
            y = max(y - 1, 0)
        elif key is Key.DOWN:
            if y < height:
                y += 1
        elif key is Key.LEFT:
            if x > 0:
                x -= 1
            elif y > 0:
                y -= 1
                row = self.document.row(y)
                x = len(row) if row is not None else 0
        elif key is Key.RIGHT:
            if x < width:
                x += 1
            elif y < height:
                y += 1
                x = 0
        elif key is Key.PAGE_UP:
            y = y - visible_height if y > visible_height else 0
        elif key is Key.PAGE_DOWN:
            y = y + visible_height if y + visible_height < height else height
        elif key is Key.HOME:
            x = 0
        elif key is Key.END:
            x = width

        row = self.document.row(y)
        width = len(row) if row is not None else 0
        self.cursor_position = Position(min(x, width), y)

    def scroll(self) -> None:
        """Shift the offset by the minimum needed to keep the cursor visible."""
        x, y = self.cursor_position.x, self.cursor_position.y
        width = self.visible_width
        height = self.visible_height
        offset_x, offset_y = self.offset.x, self.offset.y

        if y < offset_y:
            offset_y = y
        elif y >= offset_y + height:
            offset_y = y - height + 1

        if x < offset_x:
            offset_x = x
        elif x >= offset_x + width:
            offset_x = x - width + 1

        self.offset = Position(offset_x, offset_y)

    # ── save & prompt ────────────────────────────────────────────────────────

    def save_file(self) -> None:
        if self.document.filename is None:
            new_name = self.prompt("Save as: ")
            if new_name is None:
                self.set_status("Save aborted.")
                return
            self.document.filename = new_name

        try:
            self.document.save()
        except OSError:
            logging.exception("Error writing '%s'", self.document.filename)
            self.set_status("Error writing file!")
            return
        self.set_status("File saved successfully.")

    def prompt(self, message: str) -> Optional[str]:
        """Collect a line of text in the message bar.

        Enter submits, Escape cancels, Backspace removes the last grapheme.
        Returns ``None`` when cancelled or when nothing was typed.
        """
        result = ""
        while True:
            self.set_status(f"{message}{result}")
            self.refresh_screen()
            event = self.terminal.read_key()
            if event.key is Key.BACKSPACE:
                result = grapheme.slice(result, 0, max(grapheme.length(result) - 1, 0))
            elif event.key is Key.ENTER:
                break
            elif event.key is Key.ESCAPE:
                result = ""
                break
            elif event.key is Key.CHAR and event.char and event.char.isprintable():
                result += event.char

        self.set_status("")
        return result or None

    def die(self, error: TerminalError) -> NoReturn:
        """Clear the screen as far as the terminal still allows and re-raise."""
        try:
            self.terminal.clear_screen()
            self.terminal.flush()
        except TerminalError as e:
            logging.debug("Screen could not be cleared: %s", e)
        logging.critical("Terminal failure, shutting down: %s", error)
        raise error
