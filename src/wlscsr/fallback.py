"""
Generic fallback layout.

Used when no saved configuration matches the connected displays: every
active display is switched on at its preferred mode, unscaled and
untransformed, placed left to right starting at the origin. Ignored
displays are switched off.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .models import TRANSFORM_NORMAL


@dataclass(frozen=True)
class FallbackPlacement:
    """
    One output in the fallback layout.

    ``right_of`` names the output this one is placed against; None for
    the first output, which sits at (0, 0). Horizontal offsets are left
    to the backend.
    """
    name: str
    enabled: bool
    right_of: Optional[str] = None
    scale: float = 1.0
    transform: int = TRANSFORM_NORMAL
    vrr: bool = False


def fallback_layout(
    active_names: Sequence[str],
    inactive_names: Sequence[str],
) -> List[FallbackPlacement]:
    """
    Build the fallback layout for the given outputs.

    Pure function of its arguments: it never reads saved state.

    Args:
        active_names: Outputs to enable, in enumeration order
        inactive_names: Outputs to disable

    Returns:
        Placements for the active outputs followed by the inactive ones
    """
    layout: List[FallbackPlacement] = []
    previous: Optional[str] = None

    for name in active_names:
        layout.append(FallbackPlacement(name=name, enabled=True, right_of=previous))
        previous = name

    for name in inactive_names:
        layout.append(FallbackPlacement(name=name, enabled=False))

    return layout
