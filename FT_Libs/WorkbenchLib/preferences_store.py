"""
Preference persistence for Filter Tool.

Preferences are kept in a small JSON document and written back every time a
value changes:

- last_opened_file: Image reopened at start-up
- last_saved_file: Default target for the next save
- image_url: Camera URL used when grabbing an image

Functions:
    get_default_preferences_path: Resolve the preferences file location

Classes:
    PreferencesStore: Read/write access to the preferences document
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from FT_Libs.constants import (
    DEFAULT_IMAGE_URL,
    FIELD_IMAGE_URL,
    FIELD_LAST_OPENED_FILE,
    FIELD_LAST_SAVED_FILE,
    PREFERENCES_DIR_NAME,
    PREFERENCES_ENV_VAR,
    PREFERENCES_FILE_NAME,
)

logger = logging.getLogger(__name__)


def get_default_preferences_path() -> Path:
    """
    Resolve where preferences are stored.

    Returns:
        The path named by the FILTER_TOOL_PREFERENCES environment variable,
        or ~/.filter_tool/preferences.json
    """
    override = os.environ.get(PREFERENCES_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / PREFERENCES_DIR_NAME / PREFERENCES_FILE_NAME


class PreferencesStore:
    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else get_default_preferences_path()
        self._values: Dict[str, Any] = self._load()

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning(f"Ignoring unreadable preferences file {self.path}: {exc}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring preferences file {self.path}: expected a JSON object")
            return {}
        return data

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._values, indent=2), encoding="utf-8")

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        value = self._values.get(key)
        if value is None:
            return default
        return str(value)

    def set(self, key: str, value: Optional[str]) -> None:
        """Store a value (None removes it) and write the file."""
        if value is None:
            self._values.pop(key, None)
        else:
            self._values[key] = str(value)
        self._save()
        logger.debug(f"Preference {key} = {value}")

    def get_last_opened_file(self, default: Optional[str] = None) -> Optional[str]:
        return self.get(FIELD_LAST_OPENED_FILE, default)

    def set_last_opened_file(self, path: str) -> None:
        self.set(FIELD_LAST_OPENED_FILE, path)

    def get_last_saved_file(self, default: Optional[str] = None) -> Optional[str]:
        return self.get(FIELD_LAST_SAVED_FILE, default)

    def set_last_saved_file(self, path: str) -> None:
        self.set(FIELD_LAST_SAVED_FILE, path)

    def get_image_url(self, default: str = DEFAULT_IMAGE_URL) -> str:
        return self.get(FIELD_IMAGE_URL, default)

    def set_image_url(self, url: str) -> None:
        self.set(FIELD_IMAGE_URL, url)
