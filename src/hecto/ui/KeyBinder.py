# hecto/ui/KeyBinder.py
"""KeyBinder.py
==================
Translates raw terminal input into the logical :class:`~hecto.core.KeyEvent.KeyEvent`
objects consumed by the editor core.

Key Features:
- Built-in default bindings per action, overridable from the ``[keybindings]``
  section of the configuration (``"ctrl+q"``, ``"f5"``, lists, ``a|b`` strings).
- Decoding of human-readable key specifications into curses key codes.
- Robust reading of ESC/CSI/SS3 sequences that curses did not decode itself.
- Printable characters (and tab) become character events; everything that is
  neither bound nor printable becomes :attr:`Key.UNKNOWN`.

Main Methods:
1. get_key_input: Reads a single key or escape sequence from the terminal.
2. translate: Maps a raw key (int code or str) to a KeyEvent.
3. lookup: Returns the action name bound to a key specification.
"""

import curses
import logging
import re
from typing import Any, Optional

from hecto.core.KeyEvent import Key, KeyEvent


# Action names usable in the [keybindings] config section.
ACTION_KEYS: dict[str, Key] = {
    "quit": Key.QUIT,
    "save_file": Key.SAVE,
    "delete": Key.DELETE,
    "backspace": Key.BACKSPACE,
    "enter": Key.ENTER,
    "escape": Key.ESCAPE,
    "up": Key.UP,
    "down": Key.DOWN,
    "left": Key.LEFT,
    "right": Key.RIGHT,
    "page_up": Key.PAGE_UP,
    "page_down": Key.PAGE_DOWN,
    "home": Key.HOME,
    "end": Key.END,
}


def describe_binding(config: dict[str, Any], action: str, fallback: str = "") -> str:
    """Human-readable label of the first configured binding of *action*.

    ``"ctrl+q"`` becomes ``"Ctrl-Q"``; *fallback* is returned when the action
    has no string binding in ``[keybindings]``.
    """
    spec = config.get("keybindings", {}).get(action)
    if isinstance(spec, list):
        spec = next((s for s in spec if isinstance(s, str)), None)
    elif isinstance(spec, str) and "|" in spec:
        spec = spec.split("|")[0]
    if not isinstance(spec, str) or not spec.strip():
        return fallback
    parts = [p.strip() for p in spec.strip().split("+")]
    return "-".join(p.capitalize() if len(p) > 1 else p.upper() for p in parts)


class KeyBinder:
    """Maps curses input to logical key events.

    Attributes:
        stdscr: The curses window keys are read from.
        config: Editor configuration (only ``["keybindings"]`` is used).
        keybindings (dict): Action name -> list of key codes / logical strings.
        action_map (dict): Key code / logical string -> :class:`Key`.
    """

    # Keys do NOT include the leading ESC; get_key_input() strips it.
    ESCAPE_SEQUENCE_MAP: dict[str, str] = {
        # Arrows (CSI and SS3)
        "[A": "up", "[B": "down", "[C": "right", "[D": "left",
        "OA": "up", "OB": "down", "OC": "right", "OD": "left",

        # Home/End (CSI/SS3 and tilde variants)
        "[H": "home", "[F": "end", "OH": "home", "OF": "end",
        "[1~": "home", "[4~": "end", "[7~": "home", "[8~": "end",

        # Insert/Delete/PageUp/PageDown (~ style)
        "[2~": "insert", "[3~": "delete", "[5~": "pageup", "[6~": "pagedown",

        # Function keys (SS3 and tilde variants)
        "OP": "f1", "OQ": "f2", "OR": "f3", "OS": "f4",
        "[11~": "f1", "[12~": "f2", "[13~": "f3", "[14~": "f4",
        "[15~": "f5", "[17~": "f6", "[18~": "f7", "[19~": "f8",
        "[20~": "f9", "[21~": "f10", "[23~": "f11", "[24~": "f12",
    }

    def __init__(self, stdscr: Any, config: dict[str, Any]) -> None:
        self.stdscr = stdscr
        self.config = config
        self.keybindings = self._load_keybindings()
        self.action_map = self._setup_action_map()

    def _load_keybindings(self) -> dict[str, list[int | str]]:
        """Return action name -> key codes, merging user overrides onto defaults.

        A user value replaces the defaults for that action; an empty value
        disables the action. Unparseable specs are logged and skipped.
        """
        default_keybindings: dict[str, list[int | str]] = {
            "quit": ["ctrl+q", 17],
            "save_file": ["ctrl+s", 19],
            "delete": ["del", curses.KEY_DC],
            "backspace": ["backspace", curses.KEY_BACKSPACE, 8, 127],
            "enter": ["enter", curses.KEY_ENTER, 10, 13],
            "escape": ["esc", 27],
            "up": ["up", curses.KEY_UP],
            "down": ["down", curses.KEY_DOWN],
            "left": ["left", curses.KEY_LEFT],
            "right": ["right", curses.KEY_RIGHT],
            "page_up": ["pageup", curses.KEY_PPAGE],
            "page_down": ["pagedown", curses.KEY_NPAGE],
            "home": ["home", curses.KEY_HOME, 262],
            "end": ["end", getattr(curses, "KEY_END", curses.KEY_LL), 360],
        }

        user_keybindings_config: dict[str, object] = self.config.get("keybindings", {})
        parsed_keybindings: dict[str, list[int | str]] = {}

        for action in user_keybindings_config:
            if action not in default_keybindings:
                logging.warning("Unknown action %r in [keybindings]; ignored.", action)

        for action, default_value_spec in default_keybindings.items():
            key_value_spec: object = user_keybindings_config.get(action, default_value_spec)

            if not key_value_spec:
                logging.debug("Keybinding for action %r is disabled or empty.", action)
                continue

            specs_to_process: list[int | str]
            if isinstance(key_value_spec, list):
                specs_to_process = key_value_spec
            elif isinstance(key_value_spec, str) and "|" in key_value_spec:
                specs_to_process = [s.strip() for s in key_value_spec.split("|")]
            else:
                specs_to_process = [key_value_spec]  # type: ignore[list-item]

            key_codes_for_action: list[int | str] = []
            for key_spec_item in specs_to_process:
                try:
                    key_code = self._decode_keystring(key_spec_item)
                except ValueError as e:
                    logging.error(
                        "Error parsing keybinding item %r for action %r: %s. "
                        "This specific binding for the action will be ignored.",
                        key_spec_item, action, e,
                    )
                    continue
                if key_code not in key_codes_for_action:
                    key_codes_for_action.append(key_code)

            if key_codes_for_action:
                parsed_keybindings[action] = key_codes_for_action
            else:
                logging.warning(
                    "No valid key codes found for action %r after parsing. It will not be bound.",
                    action,
                )

        logging.debug("Loaded keybindings (action -> key codes): %s", parsed_keybindings)
        return parsed_keybindings

    def _decode_keystring(self, key_input: str | int) -> int | str:
        """Decode a key specification into a curses key code.

        Supports named keys (``"pageup"``, ``"f5"``), single characters and the
        ``ctrl+`` / ``shift+`` modifiers. ``alt+x`` is returned as the logical
        string ``"alt-x"``.

        Raises:
            ValueError: The specification is empty, of the wrong type, or uses
                an unknown key or modifier.
        """
        if isinstance(key_input, bool) or not isinstance(key_input, (int, str)):
            raise ValueError(
                f"Invalid key_input type: {type(key_input)}. Expected str or int."
            )
        if isinstance(key_input, int):
            return key_input

        original_key_string = key_input
        s = key_input.strip().lower()
        if not s:
            raise ValueError("Key string cannot be empty.")

        parts = s.split("+")
        if "alt" in parts[:-1] or s.startswith("alt-"):
            base = parts[-1] if not s.startswith("alt-") else s[4:]
            return f"alt-{base}"

        named_keys_map: dict[str, int] = {
            "left": curses.KEY_LEFT,
            "right": curses.KEY_RIGHT,
            "up": curses.KEY_UP,
            "down": curses.KEY_DOWN,
            "home": curses.KEY_HOME,
            "end": getattr(curses, "KEY_END", curses.KEY_LL),
            "pageup": curses.KEY_PPAGE,
            "pgup": curses.KEY_PPAGE,
            "pagedown": curses.KEY_NPAGE,
            "pgdn": curses.KEY_NPAGE,
            "delete": curses.KEY_DC,
            "del": curses.KEY_DC,
            "backspace": curses.KEY_BACKSPACE,
            "insert": curses.KEY_IC,
            "tab": 9,
            "enter": curses.KEY_ENTER,
            "return": curses.KEY_ENTER,
            "space": ord(" "),
            "esc": 27,
            "escape": 27,
        }
        named_keys_map.update(
            {f"f{i}": getattr(curses, f"KEY_F{i}", 264 + i) for i in range(1, 13)}
        )

        if s in named_keys_map:
            return named_keys_map[s]

        base_key_str = parts[-1].strip()
        modifiers = set(p.strip() for p in parts[:-1])

        base_code: int
        if base_key_str in named_keys_map:
            base_code = named_keys_map[base_key_str]
        elif len(base_key_str) == 1:
            base_code = ord(base_key_str)
        else:
            raise ValueError(f"Unknown base key '{base_key_str}' in '{original_key_string}'")

        if "ctrl" in modifiers:
            modifiers.remove("ctrl")
            if len(base_key_str) == 1 and "a" <= base_key_str <= "z":
                base_code = ord(base_key_str) - ord("a") + 1
            elif base_key_str == "\\":
                base_code = 28
            elif base_key_str == "]":
                base_code = 29
            elif base_key_str == "/":
                base_code = 31
            else:
                raise ValueError(f"Unsupported Ctrl combination '{original_key_string}'")

        if "shift" in modifiers:
            modifiers.remove("shift")
            if len(base_key_str) == 1 and "a" <= base_key_str <= "z" and base_code == ord(base_key_str):
                base_code = ord(base_key_str.upper())

        if modifiers:
            raise ValueError(
                f"Unknown or unhandled modifiers {sorted(modifiers)} in '{original_key_string}'"
            )
        return base_code

    def _setup_action_map(self) -> dict[int | str, Key]:
        """Build key code -> logical key, warning on conflicting bindings."""
        final_key_action_map: dict[int | str, Key] = {curses.KEY_RESIZE: Key.RESIZE}

        for action_name, key_code_list in self.keybindings.items():
            logical_key = ACTION_KEYS[action_name]
            for key_code in key_code_list:
                existing = final_key_action_map.get(key_code)
                if existing is not None and existing is not logical_key:
                    logging.warning(
                        f"Keybinding for action '{action_name}' (key: {key_code}) is overwriting "
                        f"an existing mapping for '{existing.value}'."
                    )
                final_key_action_map[key_code] = logical_key

        logging.debug(
            "Final constructed action map: %s",
            {k: v.value for k, v in final_key_action_map.items()},
        )
        return final_key_action_map

    def translate(self, raw: int | str) -> KeyEvent:
        """Turn a raw key from :meth:`get_key_input` into a :class:`KeyEvent`."""
        lookup_key: int | str = raw
        if isinstance(raw, str) and len(raw) == 1:
            lookup_key = ord(raw)

        logical_key = self.action_map.get(lookup_key)
        if logical_key is not None:
            return KeyEvent(logical_key)

        if lookup_key == 9:
            return KeyEvent.of_char("\t")
        if isinstance(raw, str) and len(raw) == 1 and raw.isprintable():
            return KeyEvent.of_char(raw)

        logging.debug("translate: unbound input %r", raw)
        return KeyEvent(Key.UNKNOWN)

    def get_key_input(self, window: Optional[Any] = None) -> int | str:
        """Block until one key (or escape sequence) is available.

        Returns:
            int | str:
            - curses key code (int) for keys curses decoded itself,
            - the character (str) for ordinary input,
            - the decoded key code for a known ESC sequence,
            - ``"alt-<char>"`` for an Alt/Meta chord,
            - 27 for a lone or unrecognised ESC.

        Raises:
            curses.error: Reading from the terminal failed.
        """
        target = window or self.stdscr
        ch = target.get_wch()
        if ch not in ("\x1b", 27):
            return ch

        # ESC received: lone ESC, Alt chord, or an escape sequence
        seq = ""
        target.nodelay(True)
        try:
            while True:
                try:
                    nx = target.get_wch()
                except curses.error:
                    break
                if isinstance(nx, str):
                    seq += nx
                elif 0 <= nx <= 255:
                    seq += chr(nx)
                else:
                    seq += f"<{nx}>"
        finally:
            target.nodelay(False)

        if not seq:
            return 27

        if seq[0] == "\x1b":
            seq = seq[1:]

        if len(seq) == 1 and seq.isprintable():
            return f"alt-{seq.lower()}"

        mapped = self.ESCAPE_SEQUENCE_MAP.get(seq)
        if not mapped:
            cleaned = "".join(re.findall(r"[\[O0-9;~A-Za-z]", seq))
            mapped = self.ESCAPE_SEQUENCE_MAP.get(cleaned)

        if mapped:
            code = self._decode_keystring(mapped)
            logging.debug("get_key_input: ESC %r -> %r -> code %r", seq, mapped, code)
            return code

        logging.warning("get_key_input: unknown escape sequence: ESC + %r", seq)
        return 27

    def lookup(self, key_spec: str | int) -> Optional[str]:
        """Return the action bound to *key_spec* (e.g. ``"ctrl+s"``), or None."""
        try:
            decoded_key = self._decode_keystring(key_spec)
        except ValueError:
            return None

        for action_name, key_list in self.keybindings.items():
            if decoded_key in key_list:
                return action_name
        return None

