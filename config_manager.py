"""JSON persistence for the controller configuration."""

import json
import logging
from pathlib import Path
from typing import Any

from config import Config, DEFAULT_CONFIG

logger = logging.getLogger(__name__)

# Raised by Config.from_dict for malformed or invalid data
CONFIG_ERRORS = (AttributeError, KeyError, TypeError, ValueError)


def default_config() -> Config:
    """A fresh copy of the default configuration."""
    return Config.from_dict(DEFAULT_CONFIG.to_dict())


class ConfigManager:
    """Holds the configuration and keeps it in sync with a JSON file.

    Bus settings and fixtures are read when a controller is built, so
    changes made here apply to the next controller (or the next start).
    """

    def __init__(self, config_path: str | Path = "config.json") -> None:
        self.config_path = Path(config_path)
        self._config: Config | None = None

    @property
    def config(self) -> Config:
        if self._config is None:
            self._config = self.load()
        return self._config

    def load(self) -> Config:
        """Read the file, falling back to the default rig if it is missing or broken."""
        if not self.config_path.exists():
            logger.info("No config file at %s, using defaults", self.config_path)
            return default_config()
        try:
            data = json.loads(self.config_path.read_text())
            config = Config.from_dict(data)
        except (json.JSONDecodeError, *CONFIG_ERRORS) as e:
            logger.error("Cannot load %s (%s), using defaults", self.config_path, e)
            return default_config()
        logger.info("Loaded config from %s", self.config_path)
        return config

    def save(self) -> None:
        """Write the current config to the file."""
        self.config_path.write_text(json.dumps(self.config.to_dict(), indent=2))
        logger.info("Saved config to %s", self.config_path)

    def reload(self) -> Config:
        """Discard in-memory changes and read the file again."""
        self._config = self.load()
        return self._config

    def update_from_dict(self, data: dict[str, Any]) -> Config:
        """Replace the config with one parsed from a dictionary.

        The current config is kept if the data does not parse.

        Raises:
            AttributeError, KeyError, TypeError, ValueError: if the data is
                not a valid config
        """
        self._config = Config.from_dict(data)
        logger.info("Config updated")
        return self._config
