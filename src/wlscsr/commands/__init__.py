"""CLI commands module."""

from .info import show_info
from .restore import restore_config
from .save import save_config

__all__ = [
    "save_config",
    "restore_config",
    "show_info",
]
