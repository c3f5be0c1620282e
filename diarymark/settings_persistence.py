"""Settings persistence for editor preferences.

Preferences are stored as JSON in an OS-appropriate config location and
survive application restarts.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS: Dict[str, Any] = {
    "default_highlight_color": EditorConstants.DEFAULT_HIGHLIGHT_COLOR,
    "max_history": None,
    "escape_html": False,
    "show_preview": True,
}


class SettingsPersistence:
    """Manages persistent storage of editor settings."""

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        if config_dir is None:
            # Get platform-appropriate config directory
            config_dir = platformdirs.user_config_dir(EditorConstants.APP_NAME, EditorConstants.APP_AUTHOR)
        self._config_dir = Path(config_dir)
        self._settings_file = self._config_dir / EditorConstants.SETTINGS_FILENAME
        self._settings_cache: Optional[Dict[str, Any]] = None

    def _ensure_config_dir(self) -> None:
        """Ensure the config directory exists."""
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create config directory {self._config_dir}: {e}")

    def _load_stored(self) -> Dict[str, Any]:
        if self._settings_cache is not None:
            return self._settings_cache

        if not self._settings_file.exists():
            self._settings_cache = {}
            return self._settings_cache

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            self._settings_cache = {}
            return self._settings_cache

        # Validate that it's a dict
        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            data = {}

        self._settings_cache = data
        return self._settings_cache

    def load_settings(self) -> Dict[str, Any]:
        """Load settings merged over the defaults.

        Stored values that fail validation are dropped with a warning.
        """
        settings = dict(DEFAULT_SETTINGS)
        for key, value in self._load_stored().items():
            if self.validate_setting(key, value):
                settings[key] = value
            else:
                logger.warning(f"Ignoring invalid setting {key}={value!r}")
        return settings

    def save_settings(self, settings: Dict[str, Any]) -> bool:
        """Save settings to disk atomically.

        Returns:
            True if save was successful, False otherwise.
        """
        for key, value in settings.items():
            if not self.validate_setting(key, value):
                logger.warning(f"Refusing to save invalid setting {key}={value!r}")
                return False

        self._ensure_config_dir()

        # Use atomic write pattern (temp file + rename)
        temp_file = self._settings_file.with_suffix('.tmp')

        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(settings, f, indent=2)

            temp_file.replace(self._settings_file)

            self._settings_cache = dict(settings)
            return True

        except OSError as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            # Clean up temp file if it exists
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False

    def update_setting(self, key: str, value: Any) -> bool:
        """Change one stored setting, keeping the others."""
        stored = dict(self._load_stored())
        stored[key] = value
        return self.save_settings(stored)

    def validate_setting(self, key: str, value: Any) -> bool:
        """Validate a setting value.

        Args:
            key: Setting key name.
            value: Setting value to validate.

        Returns:
            True if setting is valid, False otherwise.
        """
        if key == 'default_highlight_color':
            return isinstance(value, str) and value.lower() in EditorConstants.HIGHLIGHT_PALETTE

        if key == 'max_history':
            if value is None:
                return True  # Bounded only by memory
            # bool is an int subclass
            return isinstance(value, int) and not isinstance(value, bool) and value >= 1

        if key in ('escape_html', 'show_preview'):
            return isinstance(value, bool)

        # Unknown settings are considered valid (forward compatibility)
        return True
