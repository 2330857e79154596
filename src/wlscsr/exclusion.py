"""
Lid-based exclusion of displays.

A lid rule maps an output name to an indicator file such as
/proc/acpi/button/lid/LID0/state. When the file's content ends with
"closed", the display is ignored for this run. Unreadable indicators
never exclude a display.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Set, Tuple

from .config import LidRule
from .models import DisplayHandle

logger = logging.getLogger(__name__)

LID_CLOSED = b"closed"


def is_lid_closed(indicator: Path) -> bool:
    """
    Check whether a lid indicator file reports a closed lid.

    Args:
        indicator: Path to the indicator file

    Returns:
        True if the trimmed file content ends with "closed"
    """
    try:
        contents = Path(indicator).read_bytes()
    except OSError as e:
        logger.debug(f"Cannot read lid indicator {indicator}: {e}")
        return False
    return contents.strip().endswith(LID_CLOSED)


def excluded_names(rules: Iterable[LidRule]) -> Set[str]:
    """Names of outputs whose lid is currently closed."""
    names = set()
    for rule in rules:
        if is_lid_closed(rule.file):
            logger.info(f"Lid {rule.file} is closed, ignoring {rule.head}")
            names.add(rule.head)
    return names


def partition_displays(
    displays: Iterable[DisplayHandle],
    rules: Iterable[LidRule],
) -> Tuple[List[DisplayHandle], List[DisplayHandle]]:
    """
    Split displays into active and ignored sets.

    Enumeration order is preserved within each group.

    Returns:
        (active, ignored)
    """
    ignored_names = excluded_names(rules)
    active: List[DisplayHandle] = []
    ignored: List[DisplayHandle] = []

    for display in displays:
        if display.name is not None and display.name in ignored_names:
            ignored.append(display)
        else:
            active.append(display)

    return active, ignored
