# tests/ui/test_keybinder.py
"""Unit tests for the `KeyBinder` class.
========================================

Covers key specification decoding, user overrides of the default bindings,
translation of raw curses input into `KeyEvent`s and escape-sequence reading.
Real curses key constants are used; no terminal is initialised.
"""

import curses
from unittest.mock import MagicMock

import pytest

from hecto.core.KeyEvent import Key, KeyEvent
from hecto.ui.KeyBinder import KeyBinder, describe_binding


def make_binder(keybindings: dict | None = None, stdscr: MagicMock | None = None) -> KeyBinder:
    return KeyBinder(stdscr or MagicMock(), {"keybindings": keybindings or {}})


# --- decoding ---
@pytest.mark.parametrize(
    ("spec", "expected"),
    [
        ("ctrl+a", 1),
        ("Ctrl+Q", 17),
        ("f5", curses.KEY_F5),
        ("pageup", curses.KEY_PPAGE),
        ("del", curses.KEY_DC),
        ("shift+a", ord("A")),
        ("x", ord("x")),
        ("alt+x", "alt-x"),
        (42, 42),
    ],
)
def test_decode_keystring(spec: str | int, expected: int | str) -> None:
    assert make_binder()._decode_keystring(spec) == expected


@pytest.mark.parametrize("spec", ["", "ctrl+1", "hyper+q", "nosuchkey"])
def test_decode_keystring_rejects_invalid(spec: str) -> None:
    with pytest.raises(ValueError):
        make_binder()._decode_keystring(spec)


# --- translation with default bindings ---
@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("\x11", KeyEvent(Key.QUIT)),
        ("\x13", KeyEvent(Key.SAVE)),
        ("\n", KeyEvent(Key.ENTER)),
        ("\r", KeyEvent(Key.ENTER)),
        (curses.KEY_ENTER, KeyEvent(Key.ENTER)),
        ("\x7f", KeyEvent(Key.BACKSPACE)),
        (curses.KEY_BACKSPACE, KeyEvent(Key.BACKSPACE)),
        (curses.KEY_DC, KeyEvent(Key.DELETE)),
        (27, KeyEvent(Key.ESCAPE)),
        (curses.KEY_UP, KeyEvent(Key.UP)),
        (curses.KEY_DOWN, KeyEvent(Key.DOWN)),
        (curses.KEY_LEFT, KeyEvent(Key.LEFT)),
        (curses.KEY_RIGHT, KeyEvent(Key.RIGHT)),
        (curses.KEY_PPAGE, KeyEvent(Key.PAGE_UP)),
        (curses.KEY_NPAGE, KeyEvent(Key.PAGE_DOWN)),
        (curses.KEY_HOME, KeyEvent(Key.HOME)),
        (curses.KEY_RESIZE, KeyEvent(Key.RESIZE)),
    ],
)
def test_translate_bound_keys(raw: int | str, expected: KeyEvent) -> None:
    assert make_binder().translate(raw) == expected


@pytest.mark.parametrize("raw", ["a", "Z", " ", "\u00e9", "\u65e5", "\t"])
def test_translate_printable_and_tab_to_char(raw: str) -> None:
    assert make_binder().translate(raw) == KeyEvent.of_char(raw)


@pytest.mark.parametrize("raw", ["\x01", curses.KEY_F5, "alt-x", curses.KEY_IC])
def test_translate_unbound_to_unknown(raw: int | str) -> None:
    assert make_binder().translate(raw) == KeyEvent(Key.UNKNOWN)


# --- user overrides ---
def test_override_replaces_default_binding() -> None:
    binder = make_binder({"save_file": "f2"})
    assert binder.translate(curses.KEY_F2) == KeyEvent(Key.SAVE)
    assert binder.translate("\x13") == KeyEvent(Key.UNKNOWN)


def test_override_accepts_pipe_separated_specs() -> None:
    binder = make_binder({"quit": "ctrl+q|ctrl+w"})
    assert binder.translate("\x11") == KeyEvent(Key.QUIT)
    assert binder.translate("\x17") == KeyEvent(Key.QUIT)


def test_invalid_spec_is_skipped() -> None:
    binder = make_binder({"quit": ["hyper+q", "ctrl+w"]})
    assert binder.keybindings["quit"] == [23]
    assert binder.translate("\x11") == KeyEvent(Key.UNKNOWN)


def test_empty_spec_disables_action() -> None:
    binder = make_binder({"save_file": ""})
    assert "save_file" not in binder.keybindings
    assert binder.translate("\x13") == KeyEvent(Key.UNKNOWN)


def test_printable_key_can_be_bound() -> None:
    binder = make_binder({"quit": "q"})
    assert binder.translate("q") == KeyEvent(Key.QUIT)


def test_lookup() -> None:
    binder = make_binder()
    assert binder.lookup("ctrl+s") == "save_file"
    assert binder.lookup("ctrl+q") == "quit"
    assert binder.lookup("esc") == "escape"
    assert binder.lookup("ctrl+a") is None
    assert binder.lookup("hyper+z") is None


# --- reading ---
def test_get_key_input_plain_character() -> None:
    stdscr = MagicMock()
    stdscr.get_wch.side_effect = ["a"]
    assert make_binder(stdscr=stdscr).get_key_input() == "a"
    stdscr.nodelay.assert_not_called()


@pytest.mark.parametrize(
    ("sequence", "expected"),
    [
        (["[", "A"], curses.KEY_UP),
        (["O", "D"], curses.KEY_LEFT),
        (["[", "3", "~"], curses.KEY_DC),
        (["[", "6", "~"], curses.KEY_NPAGE),
        (["[", "F"], curses.KEY_END if hasattr(curses, "KEY_END") else curses.KEY_LL),
        (["x"], "alt-x"),
        ([], 27),
        (["[", "9", "9", "Z"], 27),
    ],
)
def test_get_key_input_escape_sequences(sequence: list[str], expected: int | str) -> None:
    stdscr = MagicMock()
    stdscr.get_wch.side_effect = ["\x1b", *sequence, curses.error]
    binder = make_binder(stdscr=stdscr)

    assert binder.get_key_input() == expected
    stdscr.nodelay.assert_any_call(True)
    assert stdscr.nodelay.call_args_list[-1].args == (False,)


def test_get_key_input_propagates_read_failure() -> None:
    stdscr = MagicMock()
    stdscr.get_wch.side_effect = curses.error("no input")
    with pytest.raises(curses.error):
        make_binder(stdscr=stdscr).get_key_input()


# --- labels ---
@pytest.mark.parametrize(
    ("keybindings", "expected"),
    [
        ({"quit": "ctrl+q"}, "Ctrl-Q"),
        ({"quit": "f10"}, "F10"),
        ({"quit": ["ctrl+x", 24]}, "Ctrl-X"),
        ({"quit": "ctrl+w|ctrl+q"}, "Ctrl-W"),
        ({}, "fallback"),
    ],
)
def test_describe_binding(keybindings: dict, expected: str) -> None:
    assert describe_binding({"keybindings": keybindings}, "quit", "fallback") == expected
