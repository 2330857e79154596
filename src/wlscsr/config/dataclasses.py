"""
Configuration dataclasses for wlscsr.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from ..exceptions import ConfigError, ConfigValidationError

# Backend name -> (default executable, environment override)
BACKEND_EXECUTABLES: Dict[str, Optional[tuple]] = {
    "wlr-randr": ("wlr-randr", "WLSCSR_WLR_RANDR"),
    "hyprctl": ("hyprctl", "WLSCSR_HYPRCTL"),
    "hyprland-ipc": None,  # Talks to the compositor socket directly
}

DEFAULT_BACKEND = "wlr-randr"

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


@dataclass
class LidRule:
    """Ignore output ``head`` while the indicator ``file`` reports a closed lid."""
    file: Path
    head: str

    @classmethod
    def from_config(cls, data: Any, index: int = 0) -> 'LidRule':
        """Parse one [[lid]] table."""
        if not isinstance(data, dict):
            raise ConfigError(f"lid[{index}] must be a table with 'file' and 'head'")

        unknown = set(data) - {'file', 'head'}
        if unknown:
            raise ConfigError(f"Unknown key(s) {sorted(unknown)} in lid[{index}]")

        for key in ('file', 'head'):
            if key not in data:
                raise ConfigError(f"lid[{index}] is missing required key '{key}'")
            if not isinstance(data[key], str) or not data[key]:
                raise ConfigError(f"lid[{index}].{key} must be a non-empty string")

        return cls(file=Path(data['file']).expanduser(), head=data['head'])


@dataclass
class BackendConfig:
    """Which display backend to use and how to reach it."""
    name: str = DEFAULT_BACKEND
    executable: Optional[str] = None
    timeout: int = 10  # Seconds per backend call

    def __post_init__(self) -> None:
        if self.name not in BACKEND_EXECUTABLES:
            raise ConfigValidationError(
                f"Unknown backend: {self.name}\n"
                f"Must be one of: {list(BACKEND_EXECUTABLES)}"
            )
        if self.timeout <= 0:
            raise ConfigValidationError(
                f"Backend timeout ({self.timeout}s) must be positive."
            )

    def get_executable(self) -> Optional[str]:
        """
        Resolve the executable for command-line backends.

        Explicit setting first, then the backend's environment variable,
        then the plain tool name. Returns None for socket backends.
        """
        defaults = BACKEND_EXECUTABLES[self.name]
        if defaults is None:
            return None
        if self.executable:
            return self.executable
        tool, env_var = defaults
        return os.environ.get(env_var) or tool


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.level.upper() not in LOG_LEVELS:
            raise ConfigValidationError(
                f"Invalid log level: {self.level}\n"
                f"Must be one of: {LOG_LEVELS}"
            )


@dataclass
class StoreConfig:
    """Snapshot store location."""
    state_dir: Optional[str] = None

    def get_state_dir(self, default: Path) -> Path:
        if self.state_dir:
            return Path(self.state_dir).expanduser()
        return default
