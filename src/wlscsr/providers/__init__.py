"""Display backends."""

import logging

from ..config import BackendConfig
from .base import DisplayProvider
from .hyprland import HyprctlProvider, HyprlandIPCProvider
from .wlr_randr import WlrRandrProvider

logger = logging.getLogger(__name__)


def get_provider(config: BackendConfig) -> DisplayProvider:
    """Create the provider selected by the backend configuration."""
    if config.name == "hyprctl":
        return HyprctlProvider(config.get_executable(), timeout=config.timeout)
    if config.name == "hyprland-ipc":
        if config.executable:
            logger.warning(
                f"Ignoring executable {config.executable}: "
                "the hyprland-ipc backend talks to the compositor socket directly"
            )
        return HyprlandIPCProvider(timeout=config.timeout)
    return WlrRandrProvider(config.get_executable(), timeout=config.timeout)


__all__ = [
    "DisplayProvider",
    "HyprctlProvider",
    "HyprlandIPCProvider",
    "WlrRandrProvider",
    "get_provider",
]
