"""
Configuration package for wlscsr.
"""

from .main import Config
from .dataclasses import (
    BackendConfig,
    LidRule,
    LoggingConfig,
    StoreConfig,
)
