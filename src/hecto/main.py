#!/usr/bin/env python3
# src/hecto/main.py
"""
Hecto Main Entry Point
======================

Process entry for the Hecto editor. It performs:
1) Environment Loading: reads ~/.config/hecto/.env early (e.g. HECTO_KEYTRACE).
2) Configuration & Logging: loads config and initializes logging ASAP.
3) Curses Wrapper: safely initializes/tears down curses to avoid terminal corruption.
4) Application Run: builds the Terminal and the Hecto session and runs its loop.

Usage: ``hecto [FILE]``. A file that cannot be opened is not fatal; the editor
starts with an empty buffer and reports the failure in the message bar.
"""

from __future__ import annotations

import curses
import locale
import logging
import signal
import sys
from typing import Any, Optional

from dotenv import load_dotenv

from hecto.core.Hecto import Hecto
from hecto.ui.Terminal import Terminal
from hecto.utils.logging_config import setup_logging
from hecto.utils.utils import get_config_dir, load_config


logger = logging.getLogger("hecto")


def _resolve_cli_path(argv: list[str]) -> Optional[str]:
    """Return the optional file argument (argv[1]), or None when absent or blank."""
    if len(argv) <= 1:
        return None
    raw = argv[1].strip()
    return raw or None


def main_app_runner(
    stdscr: curses.window, config: dict[str, Any], file_to_open: Optional[str]
) -> None:
    """
    Target for `curses.wrapper`. Sets up the terminal and runs the editor.

    Args:
        stdscr: Curses standard screen window provided by wrapper.
        config: Application configuration dict.
        file_to_open: Optional CLI path.
    """
    terminal = Terminal(stdscr, config)
    terminal.enter()
    try:
        editor = Hecto(terminal, config)

        # Ignore terminal suspension (Ctrl+Z), typical for full-screen TUIs.
        if hasattr(signal, "SIGTSTP"):
            try:
                signal.signal(signal.SIGTSTP, signal.SIG_IGN)
            except (OSError, ValueError):
                logger.debug("Could not ignore SIGTSTP.", exc_info=True)

        if file_to_open:
            editor.preload_cli_document(file_to_open)

        editor.run()
    finally:
        terminal.exit()


def start(argv: Optional[list[str]] = None) -> None:
    """
    Loads environment, configuration and logging, then runs the curses
    application via wrapper. Exits with status 1 on any unhandled error.
    """
    if argv is None:
        argv = sys.argv

    load_dotenv(dotenv_path=get_config_dir() / ".env")

    try:
        config: dict[str, Any] = load_config()
        setup_logging(config)
    except Exception as e:
        print(f"FATAL: Could not initialize configuration or logging system: {e}", file=sys.stderr)
        sys.exit(1)

    logger.info("Hecto editor starting up...")

    # Locale is important for proper character width/encoding behavior in curses.
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        logger.warning("Could not set system locale. Character rendering may be affected.")

    file_to_open = _resolve_cli_path(argv)

    try:
        curses.wrapper(main_app_runner, config, file_to_open)
        logger.info("Hecto editor shut down gracefully.")
    except Exception:
        logger.critical("Unhandled exception at the top level.", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    start()
