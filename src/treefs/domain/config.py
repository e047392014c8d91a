from __future__ import annotations

"""
Configuration Domain Management.

Handles persistent storage of user preferences (state file location,
auto import/export policy, disk import ignore lists, logging) as JSON in
the user data directory, with default fallback on missing or corrupted
files.
"""

import json
import logging
import os
from typing import Any, Dict

from treefs.domain.constants import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_IGNORE_DIRS,
    DEFAULT_IGNORE_EXTENSIONS,
    DEFAULT_IGNORE_FILES,
    DEFAULT_ROOT_NAME,
)
from treefs.infra.fs import get_default_state_path, get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE = os.path.join(get_user_data_dir(), "config.json")


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        "version": CURRENT_CONFIG_VERSION,

        # Persistence policy
        "state_file": get_default_state_path(),
        "auto_import": True,
        "auto_export": True,
        "root_name": DEFAULT_ROOT_NAME,

        # Disk import filters
        "ignore_dirs": list(DEFAULT_IGNORE_DIRS),
        "ignore_files": list(DEFAULT_IGNORE_FILES),
        "ignore_extensions": list(DEFAULT_IGNORE_EXTENSIONS),

        # Diagnostics
        "log_level": "INFO",
        "log_file": "",
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """
    Load the configuration from disk merged over the defaults.

    Returns:
        Dict[str, Any]: The loaded configuration or the defaults on failure.
    """
    config = get_default_config()

    if not os.path.exists(CONFIG_FILE):
        logger.debug("Config file not found. Returning defaults.")
        return config

    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return config

    config.update(data)
    config["version"] = CURRENT_CONFIG_VERSION
    return config


def save_config(config: Dict[str, Any]) -> bool:
    """
    Persist the configuration to disk.

    Args:
        config: The configuration dictionary to save.

    Returns:
        bool: True if the file was written.
    """
    try:
        os.makedirs(os.path.dirname(CONFIG_FILE), exist_ok=True)
        payload = dict(config)
        payload["version"] = CURRENT_CONFIG_VERSION
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {CONFIG_FILE}")
        return True
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
        return False
