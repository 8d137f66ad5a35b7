from __future__ import annotations

"""
Configuration Domain Management.

Handles persistent storage of user preferences and the last session
(folder, scan and report options) as JSON in the user data directory.
Scan results themselves are never persisted.
"""

import json
import logging
import os
from typing import Any, Dict

from dirstat.domain import constants as const
from dirstat.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE = os.path.join(get_user_data_dir(), "config.json")
CURRENT_CONFIG_VERSION = const.CURRENT_CONFIG_VERSION


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration (Session State).

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Target
        "input_path": os.getcwd(),

        # Scanner
        "max_workers": const.DEFAULT_MAX_WORKERS,
        "follow_symlinks": const.DEFAULT_FOLLOW_SYMLINKS,

        # Report
        "top_n": const.DEFAULT_TOP_N,
        "extent": const.DEFAULT_EXTENT,

        # Diagnostics
        "log_level": const.DEFAULT_LOG_LEVEL,
    }


def get_default_app_state() -> Dict[str, Any]:
    """
    Generate the complete default application state structure.

    Returns:
        Dict[str, Any]: The full JSON structure for config.json.
    """
    return {
        "version": CURRENT_CONFIG_VERSION,
        "app_settings": {
            "theme": "System",
        },
        "last_session": get_default_config(),
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_app_state() -> Dict[str, Any]:
    """
    Load application state from disk.

    Unknown or missing sections fall back to defaults; a corrupted file
    never prevents startup.

    Returns:
        Dict[str, Any]: The loaded state or a default structure on failure.
    """
    default_state = get_default_app_state()

    if not os.path.exists(CONFIG_FILE):
        logger.debug("Config file not found. Returning defaults.")
        return default_state

    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return default_state

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return default_state

    state = default_state
    if isinstance(data.get("app_settings"), dict):
        state["app_settings"].update(data["app_settings"])
    if isinstance(data.get("last_session"), dict):
        state["last_session"].update(data["last_session"])

    state["version"] = CURRENT_CONFIG_VERSION
    return state


def save_app_state(state: Dict[str, Any]) -> None:
    """
    Persist application state to disk.

    Args:
        state: The state dictionary to save.
    """
    try:
        os.makedirs(os.path.dirname(CONFIG_FILE), exist_ok=True)
        state["version"] = CURRENT_CONFIG_VERSION
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {CONFIG_FILE}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")


# -----------------------------------------------------------------------------
# Facade API
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """Retrieve the active configuration (Last Session) directly."""
    state = load_app_state()
    defaults = get_default_config()
    defaults.update(state.get("last_session", {}))
    return defaults


def save_config(config: Dict[str, Any]) -> None:
    """Save the provided config as the 'last_session'."""
    state = load_app_state()
    state["last_session"] = config
    save_app_state(state)
