"""User configuration for the editor.

Settings are read from a JSON file in the OS-appropriate config directory
(``config.json``). Every key is optional; anything missing, unreadable or
invalid falls back to the defaults in :class:`EditorConstants`.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Editor settings that may be overridden by the user."""
    tab_stop: int = EditorConstants.TAB_STOP
    message_timeout: float = EditorConstants.MESSAGE_TIMEOUT
    temp_file_ext: str = EditorConstants.TEMP_FILE_EXT


def default_config_path() -> Path:
    """Return the path of the user's config file."""
    return Path(platformdirs.user_config_dir("ded")) / "config.json"


def validate_setting(key: str, value: Any) -> bool:
    """Validate a setting value.

    Args:
        key: Setting key name.
        value: Setting value to validate.

    Returns:
        True if setting is valid, False otherwise.
    """
    if key == 'tab_stop':
        # bool is an int subclass; reject it explicitly
        if isinstance(value, bool) or not isinstance(value, int):
            return False
        return 1 <= value <= 16

    if key == 'message_timeout':
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        return value >= 0

    if key == 'temp_file_ext':
        if not isinstance(value, str):
            return False
        return len(value) > 1 and value.startswith('.') and '/' not in value

    return False


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from disk.

    Args:
        path: Config file to read. Defaults to the platform config location.

    Returns:
        Settings with valid user values applied over the defaults.
    """
    settings = Settings()
    config_file = path or default_config_path()

    if not config_file.exists():
        return settings

    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load settings from {config_file}: {e}")
        return settings

    if not isinstance(data, dict):
        logger.warning("Settings file has invalid format (not a dict), ignoring")
        return settings

    for key, value in data.items():
        if not hasattr(settings, key):
            logger.warning(f"Unknown setting {key!r} in {config_file}, ignoring")
            continue
        if not validate_setting(key, value):
            logger.warning(f"Invalid value {value!r} for setting {key!r}, ignoring")
            continue
        setattr(settings, key, value)

    logger.debug(f"Loaded settings from {config_file}: {settings}")
    return settings
