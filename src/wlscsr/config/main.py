"""
Main Config class for wlscsr.
"""

import os
import logging
from pathlib import Path
from typing import List, Optional
from dataclasses import dataclass, field

try:
    import tomli
except ImportError:
    raise ImportError("Required package 'tomli' not found. Install with: pip install tomli")

from ..exceptions import ConfigError

from .dataclasses import (
    BackendConfig,
    LidRule,
    LoggingConfig,
    StoreConfig,
)
from .validation import validate_toml_structure

APP_NAME = "wlscsr"


@dataclass
class Config:
    """
    Main configuration class for wlscsr.

    Configuration is loaded from an optional TOML file. A missing file
    yields the defaults; a malformed one is an error.
    """

    backend: BackendConfig = field(default_factory=BackendConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    lid: List[LidRule] = field(default_factory=list)

    def get_state_dir(self) -> Path:
        """Directory holding saved snapshots."""
        return self.store.get_state_dir(self.get_default_state_dir())

    @staticmethod
    def get_xdg_config_home() -> Path:
        """XDG_CONFIG_HOME if set, otherwise ~/.config."""
        xdg_config = os.environ.get("XDG_CONFIG_HOME")
        if xdg_config:
            return Path(xdg_config)
        return Path.home() / ".config"

    @classmethod
    def get_config_dir(cls) -> Path:
        """Get user configuration directory."""
        return cls.get_xdg_config_home() / APP_NAME

    @classmethod
    def get_legacy_config_file(cls) -> Path:
        """Single-file location used by earlier releases: ~/.config/wlscsr.toml."""
        return cls.get_xdg_config_home() / f"{APP_NAME}.toml"

    @classmethod
    def get_config_file(cls) -> Path:
        """
        Get default config file path.

        Prefers ~/.config/wlscsr/config.toml. When only the legacy
        ~/.config/wlscsr.toml exists, that file is used instead.
        """
        config_file = cls.get_config_dir() / "config.toml"
        legacy_file = cls.get_legacy_config_file()
        if not config_file.exists() and legacy_file.exists():
            return legacy_file
        return config_file

    @classmethod
    def get_default_state_dir(cls) -> Path:
        """
        Get snapshot state directory.

        Uses XDG_STATE_HOME if set, otherwise defaults to ~/.local/state.
        """
        xdg_state = os.environ.get("XDG_STATE_HOME")
        if xdg_state:
            return Path(xdg_state) / APP_NAME
        return Path.home() / ".local" / "state" / APP_NAME

    @classmethod
    def load(cls, config_file: Optional[Path] = None) -> 'Config':
        """
        Load configuration from TOML file.

        Args:
            config_file: Optional path to config TOML file

        Returns:
            Config instance with loaded settings

        Raises:
            ConfigError: If the file is malformed, or was given explicitly
                and does not exist
        """
        logger = logging.getLogger(__name__)

        if config_file:
            if not config_file.exists():
                raise ConfigError(f"Config file not found: {config_file}")
        else:
            config_file = cls.get_config_file()

        if not config_file.exists():
            logger.debug(f"No config file at {config_file}, using defaults")
            return cls()

        try:
            with open(config_file, 'rb') as f:
                config_dict = tomli.load(f)
        except tomli.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {config_file}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to read config file {config_file}: {e}") from e

        validate_toml_structure(config_dict, config_file)

        lid_rules = [
            LidRule.from_config(rule, index)
            for index, rule in enumerate(config_dict.get('lid', []))
        ]

        config = cls(
            backend=BackendConfig(**config_dict.get('backend', {})),
            logging=LoggingConfig(**config_dict.get('logging', {})),
            store=StoreConfig(**config_dict.get('store', {})),
            lid=lid_rules,
        )
        logger.debug(f"Loaded config from {config_file}")
        return config
