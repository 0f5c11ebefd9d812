# hecto/core/TerminalError.py
"""Error raised by the terminal device when it can no longer be used."""


class TerminalError(Exception):
    """Reading from or writing to the terminal failed; the session cannot go on."""
