# hecto/utils/utils.py
"""
hecto.utils.utils.py
====================

Core utility functions for the Hecto editor.

Key functionalities include:
- Automatic User Configuration: creates `~/.config/hecto/config.toml` and
  `~/.config/hecto/.env` templates on first run.
- Robust Configuration Loading: starts from the built-in `DEFAULT_CONFIG` and
  recursively merges the user's `config.toml` on top of it.
- Helper Utilities: deep-merging dictionaries and hex to xterm-256 colour
  conversion for the status bar.

The editor is always runnable, even if the user configuration is missing or
corrupted, because it falls back to the embedded defaults.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict

import toml

logger = logging.getLogger("hecto")

# --- Constants ---
WHITE_FG_IDX = 255

CONFIG_DIR_NAME = "hecto"

ENV_TEMPLATE = """# Environment switches for the Hecto editor.
# Set to 1 to trace every key press into keytrace.log.
HECTO_KEYTRACE=
"""

# Ultimate fallback, ensuring the application can ALWAYS start.
DEFAULT_CONFIG: Dict[str, Any] = {
    "editor": {
        "quit_times": 3,
        "message_timeout": 5.0,
        "filename_width": 20,
    },
    "colors": {
        "status_fg": "#3f3f3f",
        "status_bg": "#efefef",
    },
    "keybindings": {
        "quit": "ctrl+q",
        "save_file": "ctrl+s",
    },
    "logging": {
        "file_level": "DEBUG",
        "console_level": "WARNING",
        "log_to_console": False,
        "separate_error_log": False,
    },
}


# --- Helper Functions ---

def get_config_dir() -> Path:
    """Directory holding the user's `config.toml` and `.env`."""
    return Path.home() / ".config" / CONFIG_DIR_NAME


def ensure_user_config_exists() -> None:
    """Checks for user config files in `~/.config/hecto` and creates them if missing."""
    try:
        config_dir = get_config_dir()
        user_config_path = config_dir / "config.toml"
        user_env_path = config_dir / ".env"

        config_dir.mkdir(parents=True, exist_ok=True)

        if not user_config_path.exists():
            user_config_path.write_text(toml.dumps(DEFAULT_CONFIG), encoding="utf-8")
            logger.info(f"Created user config template at: {user_config_path}")

        if not user_env_path.exists():
            user_env_path.write_text(ENV_TEMPLATE, encoding="utf-8")
            logger.info(f"Created user .env template at: {user_env_path}")

    except Exception as e:
        logger.critical(f"Could not create user configuration files: {e}", exc_info=True)


def load_config() -> Dict[str, Any]:
    """
    Loads and merges configurations, ensuring the application can always run.
    """
    final_config = copy.deepcopy(DEFAULT_CONFIG)
    logger.debug("Loaded embedded default configuration.")

    ensure_user_config_exists()

    user_config_path = get_config_dir() / "config.toml"
    if user_config_path.is_file():
        try:
            user_config = toml.load(user_config_path)
            final_config = deep_merge(final_config, user_config)
            logger.info(f"Successfully loaded and merged user config from {user_config_path}")
        except Exception as e:
            logger.error(f"Could not parse user config '{user_config_path}': {e}. Using defaults.")

    return final_config


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Recursively merges the `override` dictionary into the `base` dictionary.
    """
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def hex_to_xterm(hex_color: str) -> int:
    """
    Converts a hexadecimal color string to the nearest xterm-256 color index.
    """
    hex_color = hex_color.lstrip("#")
    if len(hex_color) != 6:
        return WHITE_FG_IDX
    try:
        r, g, b = (int(hex_color[i:i+2], 16) for i in (0, 2, 4))
    except ValueError:
        return WHITE_FG_IDX

    if r == g == b:
        if r < 8: return 16
        if r > 248: return 231
        return round(((r - 8) / 247) * 24) + 232

    return int(
        16
        + (36 * round(r / 255 * 5))
        + (6 * round(g / 255 * 5))
        + round(b / 255 * 5)
    )
