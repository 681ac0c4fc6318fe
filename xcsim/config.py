"""
Configuration management for xcsim.

Handles loading, saving, and accessing configuration values from
environment variables, config files, and default values.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from xcsim.constants import (
    DEFAULT_CONFIG_FILE,
    DEFAULT_DEVICE_NAME,
    DEFAULT_LOG_LEVEL,
    SIMULATORS_ROOT,
)

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """
    Main configuration container for xcsim.

    Configuration is loaded from (in order of precedence):
    1. Environment variables (XCSIM_*)
    2. Config file (~/.xcsim/config.json)
    3. Default values

    Example:
        config = Config.load()
        print(config.simulators_root)

        # Or with custom config file
        config = Config.load(Path("/custom/config.json"))
    """

    # Directory holding device_set.plist and one directory per device
    simulators_root: Path = field(default_factory=lambda: SIMULATORS_ROOT)

    # Device used by bundle lookups when none is given
    default_device: str = DEFAULT_DEVICE_NAME

    # Logging
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        """Ensure paths are Path objects."""
        self.simulators_root = Path(self.simulators_root).expanduser()

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> Config:
        """
        Load configuration from file and environment.

        Args:
            config_path: Optional path to config file. If not provided,
                        uses default location (~/.xcsim/config.json).

        Returns:
            Config instance with loaded values.
        """
        # Load environment variables from .env file if present
        load_dotenv()

        config_path = config_path or DEFAULT_CONFIG_FILE
        config_data: dict[str, Any] = {}

        if config_path.exists():
            try:
                with open(config_path) as f:
                    config_data = json.load(f)
                logger.debug(f"Loaded config from {config_path}")
            except (json.JSONDecodeError, OSError) as e:
                logger.warning(f"Failed to load config from {config_path}: {e}")

        if not isinstance(config_data, dict):
            logger.warning(f"Ignoring config in {config_path}: not a JSON object")
            config_data = {}

        config_data = cls._apply_env_overrides(config_data)

        return cls._from_dict(config_data)

    @classmethod
    def _apply_env_overrides(cls, config_data: dict[str, Any]) -> dict[str, Any]:
        """Apply environment variable overrides to config data."""
        env_mappings = {
            "XCSIM_SIMULATORS_ROOT": "simulators_root",
            "XCSIM_DEFAULT_DEVICE": "default_device",
            "XCSIM_LOG_LEVEL": "log_level",
        }

        for env_var, config_key in env_mappings.items():
            value = os.environ.get(env_var)
            if value:
                config_data[config_key] = value

        return config_data

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> Config:
        """Create Config from dictionary."""
        return cls(
            simulators_root=Path(data.get("simulators_root", SIMULATORS_ROOT)),
            default_device=data.get("default_device", DEFAULT_DEVICE_NAME),
            log_level=str(data.get("log_level", DEFAULT_LOG_LEVEL)).upper(),
        )

    def save(self, config_path: Optional[Path] = None) -> None:
        """
        Save configuration to file.

        Args:
            config_path: Optional path to save to. If not provided,
                        uses default location.
        """
        config_path = config_path or DEFAULT_CONFIG_FILE
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

        logger.info(f"Saved config to {config_path}")

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "simulators_root": str(self.simulators_root),
            "default_device": self.default_device,
            "log_level": self.log_level,
        }


# Global config instance (lazy loaded)
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.load()
    return _config


def reload_config(config_path: Optional[Path] = None) -> Config:
    """Reload configuration from file."""
    global _config
    _config = Config.load(config_path)
    return _config
