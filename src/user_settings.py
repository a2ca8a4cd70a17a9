"""
Tube Joint Studio - User Settings Manager
Handles saving and loading user preferences
"""

import json
from pathlib import Path

from logging_config import get_logger

logger = get_logger(__name__)


class UserSettings:
    """Manages user settings persistence"""

    # Default settings file location (in user's home directory)
    SETTINGS_FILENAME = ".tubejoint_settings.json"

    # Default values
    DEFAULTS = {
        # Tube parameter defaults (millimetres / degrees)
        'default_profile': 'rectangular',
        'default_width': 50.0,
        'default_height': 30.0,
        'default_thickness': 3.0,
        'default_length': 100.0,
        'default_angle': 90.0,
        'snap_to_angle': True,

        # History
        'max_history': 50,

        # Export
        'export_directory': None,

        # Diagnostics
        'log_level': 'INFO',
    }

    def __init__(self, settings_path=None):
        self._settings = self.DEFAULTS.copy()
        if settings_path is None:
            self._settings_path = Path.home() / self.SETTINGS_FILENAME
        else:
            self._settings_path = Path(settings_path)
        self.load()

    @property
    def path(self):
        return self._settings_path

    def load(self):
        """Load settings from file"""
        if not self._settings_path.exists():
            return

        try:
            with open(self._settings_path, 'r', encoding='utf-8') as f:
                loaded = json.load(f)

            # Merge loaded settings with defaults (to handle new settings)
            for key, value in loaded.items():
                if key in self.DEFAULTS:
                    self._settings[key] = value

            logger.info("Settings loaded from %s", self._settings_path)

        except (json.JSONDecodeError, AttributeError, OSError) as e:
            logger.warning("Could not load settings: %s", e)

    def save(self):
        """Save settings to file"""
        try:
            with open(self._settings_path, 'w', encoding='utf-8') as f:
                json.dump(self._settings, f, indent=2)

            logger.info("Settings saved to %s", self._settings_path)

        except OSError as e:
            logger.warning("Could not save settings: %s", e)

    def get(self, key, default=None):
        """Get a setting value"""
        if default is None:
            default = self.DEFAULTS.get(key)
        return self._settings.get(key, default)

    def set(self, key, value):
        """Set a setting value"""
        self._settings[key] = value

    def set_and_save(self, key, value):
        """Set a setting value and immediately save"""
        self.set(key, value)
        self.save()

    def update(self, settings_dict):
        """Update multiple settings at once"""
        for key, value in settings_dict.items():
            self._settings[key] = value

    # Convenience properties
    @property
    def max_history(self):
        return int(self.get('max_history'))

    @max_history.setter
    def max_history(self, value):
        self.set('max_history', int(value))

    @property
    def snap_to_angle(self):
        return bool(self.get('snap_to_angle'))

    @snap_to_angle.setter
    def snap_to_angle(self, value):
        self.set('snap_to_angle', bool(value))

    @property
    def export_directory(self):
        return self.get('export_directory')

    @export_directory.setter
    def export_directory(self, value):
        self.set('export_directory', value)


# Global settings instance
_settings_instance = None


def get_settings():
    """Get the global settings instance"""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = UserSettings()
    return _settings_instance
