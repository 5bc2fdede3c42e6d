# core/config.py
# -*- coding: utf-8 -*-
import os
import logging
import copy
from typing import Optional

import appdirs
import yaml

APP_NAME = "git_toolkit"
CONFIG_DIR_ENV = "GIT_TOOLKIT_CONFIG_DIR"
CONFIG_FILENAME = "config.yaml"
REPO_LIST_FILENAME = "repos.list"

DEFAULT_CONFIG = {
    "git_executable": "git",
    "log_level": "INFO",
    "history_limit": 200,
    "checkout_history_limit": 400,
    "full_log_limit": 100,
    "graph_log_limit": 200,
    "terminal_commands": [
        ["x-terminal-emulator"],
        ["gnome-terminal"],
        ["konsole"],
        ["xterm"],
    ],
}


def resolve_config_dir(override: Optional[str] = None) -> str:
    """Returns the per-user configuration directory, creating it if needed.

    Precedence: explicit override, then $GIT_TOOLKIT_CONFIG_DIR, then the
    platform directory from appdirs (which honours XDG_CONFIG_HOME on Linux).
    """
    config_dir = override or os.environ.get(CONFIG_DIR_ENV) or appdirs.user_config_dir(APP_NAME)
    config_dir = os.path.abspath(os.path.expanduser(config_dir))
    os.makedirs(config_dir, exist_ok=True)
    logging.debug(f"Configuration directory: {config_dir}")
    return config_dir


def _valid_terminal_commands(value) -> bool:
    if not isinstance(value, list):
        return False
    return all(
        isinstance(cmd, list) and cmd and all(isinstance(part, str) and part for part in cmd)
        for cmd in value
    )


def _coerce(key, value):
    """Returns the value if it has the type of the default, else None."""
    default = DEFAULT_CONFIG[key]
    if key == "terminal_commands":
        return value if _valid_terminal_commands(value) else None
    if isinstance(default, int):
        # bool is an int subclass, reject it explicitly
        if isinstance(value, int) and not isinstance(value, bool) and value > 0:
            return value
        return None
    if isinstance(default, str):
        return value.strip() if isinstance(value, str) and value.strip() else None
    return None


def load_config(config_dir: str) -> dict:
    """Loads config.yaml from config_dir, filling in defaults for anything missing or invalid."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    config_file = os.path.join(config_dir, CONFIG_FILENAME)

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
    except FileNotFoundError:
        logging.info(f"No settings file at '{config_file}', using defaults.")
        return config
    except (OSError, yaml.YAMLError) as e:
        logging.warning(f"Could not read settings file '{config_file}': {e}. Using defaults.")
        return config

    if not loaded:
        logging.warning(f"Settings file '{config_file}' is empty, using defaults.")
        return config
    if not isinstance(loaded, dict):
        logging.warning(f"Settings file '{config_file}' is not a mapping, using defaults.")
        return config

    for key, value in loaded.items():
        if key not in DEFAULT_CONFIG:
            logging.warning(f"Unknown setting '{key}' in '{config_file}' ignored.")
            continue
        coerced = _coerce(key, value)
        if coerced is None:
            logging.warning(f"Invalid value for '{key}': {value!r}. Using default {DEFAULT_CONFIG[key]!r}.")
            continue
        config[key] = coerced

    logging.info(f"Settings loaded from '{config_file}'.")
    return config


def repo_list_path(config_dir: str) -> str:
    return os.path.join(config_dir, REPO_LIST_FILENAME)
