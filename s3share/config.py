#!/usr/bin/env python3
"""
Settings management for s3share.
Loads tool settings once per process using a singleton pattern.

The bucket choice itself lives in ~/.share.yaml and is handled by
config_store.ConfigStore; this module only covers how the tool behaves
(logging, retries, timeouts, URL layout).
"""

import os
import json
from typing import Dict, Any, Optional


class Settings:
    _instance: Optional["Settings"] = None
    _initialized = False

    # Per-user directory for settings and logs
    SHARE_HOME = os.path.join(os.path.expanduser("~"), ".share")

    # Default settings
    DEFAULT_SETTINGS = {
        "log_folder": os.path.join(SHARE_HOME, "logs"),
        "log_basename": "share",
        "max_log_size_mb": 5,
        "max_log_backups": 10,
        "max_retries": 3,
        "retry_backoff": "none",  # none, fixed or exponential
        "retry_delay": 1.0,  # seconds
        "max_retry_delay": 30.0,  # seconds
        "aws_profile": None,  # None uses the default credential chain
        "aws_region": None,
        "connect_timeout": 10,  # seconds
        "read_timeout": 60,  # seconds
        "url_domain": "s3.amazonaws.com",
        "config_path": os.path.join(os.path.expanduser("~"), ".share.yaml"),
    }

    # Settings file path
    SETTINGS_FILE = os.path.join(SHARE_HOME, "settings.json")

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(Settings, cls).__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self._settings = self._load_settings()
            self._initialized = True

    def _load_settings(self) -> Dict[str, Any]:
        """
        Load settings from the settings file, filling in defaults for any
        missing keys. A missing or unreadable file yields the defaults.

        Returns:
            Dict: Settings
        """
        if os.path.exists(self.SETTINGS_FILE):
            try:
                with open(self.SETTINGS_FILE, "r") as f:
                    settings = json.load(f)
                if isinstance(settings, dict):
                    for key, value in self.DEFAULT_SETTINGS.items():
                        if key not in settings:
                            settings[key] = value
                    return settings
            except (json.JSONDecodeError, IOError):
                # If there's an error reading the settings, use defaults
                pass

        return self.DEFAULT_SETTINGS.copy()

    def ensure_directories(self) -> None:
        """Ensure the log directory exists."""
        log_folder = self._settings.get("log_folder")
        if log_folder and not os.path.exists(log_folder):
            os.makedirs(log_folder, exist_ok=True)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a setting by key.

        Args:
            key: Setting key
            default: Default value if key doesn't exist

        Returns:
            The setting value or default if not found
        """
        return self._settings.get(key, default)


# Create a single instance of the Settings class
settings = Settings()
