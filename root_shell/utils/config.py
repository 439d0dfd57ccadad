import os
import yaml
import logging

from typing import Any

logger = logging.getLogger("Config")

class Config:
    """Settings for root shell sessions and their logging, read from YAML

    Only the logging and session sections are kept; the session section
    names the escalation provider and the shell it starts.
    """

    def __init__(self, config_path: str = "config.yaml"):
        """Read the logging and session sections from a YAML file

        Args:
            config_path: Path to the configuration file
        """
        self.config_path = config_path
        self.categories = [
            "logging",
            "session"
        ]
        for category in self.categories:
            setattr(self, category, {})

        self.load_config()

    def load_config(self) -> None:
        """Read the logging and session sections, leaving missing ones empty

        Sections that are not mappings are ignored, so a session section
        without provider or shell falls back to pkexec and sh when the
        session is opened.
        """
        if not os.path.exists(self.config_path):
            raise FileNotFoundError(f"Config file not found: {self.config_path}")

        with open(self.config_path, "r") as file:
            config = yaml.safe_load(file) or {}

        for category in self.categories:
            if category in config and isinstance(config[category], dict):
                setattr(self, category, config[category])

        logger.debug(f"Loaded configuration from {self.config_path}")

    def add_setting(self, category: str, key: str, value: Any) -> None:
        """Add a new setting to an existing category

        Args:
            category: Configuration category
            key: Setting key
            value: Value to add
        """
        if category in self.categories and key not in getattr(self, category):
            getattr(self, category)[key] = value
        else:
            raise ValueError(f"Invalid attempt to change configuration category: {category}")

    def get_setting(self, category: str, key: str, default=None) -> Any:
        """Get a specific setting

        Args:
            category: Configuration category
            key: Setting key
            default: Default value if key not found
        """
        try:
            return getattr(self, category).get(key, default)
        except (KeyError, AttributeError):
            if default is not None:
                return default
            raise ValueError(f"Setting '{key}' not found in configuration")

    def has_setting(self, category: str, key: str) -> bool:
        """Check if a setting exists

        Args:
            category: Configuration category
            key: Setting key
        """
        try:
            return key in getattr(self, category)
        except (KeyError, AttributeError, TypeError):
            return False
