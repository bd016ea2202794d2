"""User settings for the editor.

Settings live in a JSON file in the OS-appropriate config directory. A
missing file means defaults; an unreadable file or a bad value is logged and
the default is kept, so a broken config never stops the editor from starting.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)


@dataclass
class EditorSettings:
    message_timeout: float = EditorConstants.STATUS_MESSAGE_TIMEOUT  # Seconds
    confirm_quit: bool = True  # Ask again before quitting with unsaved changes


def settings_path() -> Path:
    """Path of the settings file for this user."""
    return Path(platformdirs.user_config_dir("texte")) / "settings.json"


def _valid(name: str, value) -> bool:
    if name == "message_timeout":
        return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0
    if name == "confirm_quit":
        return isinstance(value, bool)
    return False


def load_settings(path: Optional[Path] = None) -> EditorSettings:
    """Load settings from `path` (default: the user config file).

    Returns:
        EditorSettings with every valid key from the file applied.
    """
    path = path or settings_path()
    settings = EditorSettings()
    if not path.exists():
        return settings

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load settings from {path}: {e}")
        return settings

    if not isinstance(data, dict):
        logger.warning("Settings file has invalid format (not a dict), ignoring")
        return settings

    known = {f.name for f in fields(EditorSettings)}
    for name, value in data.items():
        if name not in known:
            logger.warning(f"Unknown setting {name!r} ignored")
        elif not _valid(name, value):
            logger.warning(f"Invalid value for {name}: {value!r}, using default")
        else:
            setattr(settings, name, value)
    return settings
