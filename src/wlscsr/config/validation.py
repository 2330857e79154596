"""
Configuration validation for wlscsr.
"""

from pathlib import Path
from typing import Any, Dict

from ..exceptions import ConfigError


def validate_toml_structure(config_dict: Dict[str, Any], config_file: Path) -> None:
    """
    Validate TOML structure before creating dataclasses.

    Checks for unknown sections and keys, providing helpful error messages.
    A malformed exclusion policy is never ignored: displays that should stay
    off could otherwise be switched on.

    Args:
        config_dict: Loaded TOML configuration dictionary
        config_file: Path to config file for error messages

    Raises:
        ConfigError: If structure validation fails
    """
    valid_structure = {
        'backend': {
            'name': str,
            'executable': str,
            'timeout': int,
        },
        'logging': {
            'level': str,
        },
        'store': {
            'state_dir': str,
        },
        'lid': list,  # [[lid]] array of tables, checked by LidRule.from_config
    }

    # Check for unknown sections
    for section in config_dict:
        if section not in valid_structure:
            raise ConfigError(
                f"Unknown config section '{section}' in {config_file}. "
                f"Valid sections: {list(valid_structure.keys())}"
            )

    for section_name, section_config in config_dict.items():
        valid_keys = valid_structure[section_name]

        if valid_keys == list:
            if not isinstance(section_config, list):
                raise ConfigError(
                    f"'{section_name}' must be an array of tables ([[{section_name}]]) "
                    f"in {config_file}"
                )
            continue

        if not isinstance(section_config, dict):
            raise ConfigError(
                f"Section '{section_name}' must be a table in {config_file}"
            )

        for key, value in section_config.items():
            if key not in valid_keys:
                raise ConfigError(
                    f"Unknown key '{key}' in section '{section_name}' in {config_file}. "
                    f"Valid keys: {list(valid_keys.keys())}"
                )

            # Basic type checking
            expected_type = valid_keys[key]
            if not isinstance(value, expected_type) or isinstance(value, bool):
                raise ConfigError(
                    f"Key '{section_name}.{key}' must be of type {expected_type.__name__} "
                    f"in {config_file}, got {type(value).__name__}"
                )
