"""User configuration for the editor.

Settings live in a JSON file in the user's config directory (or the file
named by ``TERMPAD_CONFIG``).  Missing, unreadable or invalid values are
logged and replaced by defaults; configuration never stops the editor
from starting.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TERMPAD_CONFIG"
LOG_ENV_VAR = "TERMPAD_LOG"
CONFIG_FILENAME = "config.json"


@dataclass
class EditorSettings:
    tab_stop: int = EditorConstants.TAB_STOP
    quit_times: int = EditorConstants.QUIT_TIMES
    message_timeout: float = EditorConstants.MESSAGE_TIMEOUT
    log_file: Optional[str] = None
    log_level: str = "WARNING"


def default_config_path() -> Path:
    """Return the config file location, honouring ``TERMPAD_CONFIG``."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return Path(platformdirs.user_config_dir("termpad")) / CONFIG_FILENAME


def validate_setting(key: str, value: Any) -> bool:
    """Return True if ``value`` is acceptable for setting ``key``."""
    if key == 'tab_stop':
        return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 16
    if key == 'quit_times':
        return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 10
    if key == 'message_timeout':
        return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0
    if key == 'log_file':
        return value is None or isinstance(value, str)
    if key == 'log_level':
        return isinstance(value, str) and isinstance(logging.getLevelName(value.upper()), int)
    return False


def _read_config(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load settings from {path}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Settings file {path} has invalid format (not a dict), ignoring")
        return {}
    return data


def load_settings(path: Optional[Path] = None) -> EditorSettings:
    """Load settings from ``path`` (default: the user config file)."""
    path = path or default_config_path()
    data = _read_config(path)
    settings = EditorSettings()
    known = {f.name for f in fields(EditorSettings)}
    for key, value in data.items():
        if key not in known:
            logger.warning(f"Unknown setting {key!r} in {path}, ignoring")
            continue
        if not validate_setting(key, value):
            logger.warning(f"Invalid value {value!r} for setting {key!r}, using default")
            continue
        setattr(settings, key, value)
    if os.environ.get(LOG_ENV_VAR):
        settings.log_file = os.environ[LOG_ENV_VAR]
    return settings
