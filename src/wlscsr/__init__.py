"""
wlscsr - Wayland screen configuration save/restore.

Save the layout of the connected monitors and restore it later, matching
monitors by make, model and serial rather than by output name.
"""

__version__ = "0.1.0"

from .config import Config, LidRule
from .models import DisplayHandle, DisplayIdentity, GeometryConfig
from .fingerprint import compute_fingerprint, fingerprint_displays
from .store import SnapshotStore
from .reconcile import Reconciler
from .fallback import FallbackPlacement, fallback_layout
from .exclusion import partition_displays
from .providers import (
    DisplayProvider,
    HyprctlProvider,
    HyprlandIPCProvider,
    WlrRandrProvider,
    get_provider,
)

__all__ = [
    "Config",
    "LidRule",
    "DisplayHandle",
    "DisplayIdentity",
    "GeometryConfig",
    "compute_fingerprint",
    "fingerprint_displays",
    "SnapshotStore",
    "Reconciler",
    "FallbackPlacement",
    "fallback_layout",
    "partition_displays",
    "DisplayProvider",
    "HyprctlProvider",
    "HyprlandIPCProvider",
    "WlrRandrProvider",
    "get_provider",
]
