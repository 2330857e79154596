"""Save command."""

import logging
from pathlib import Path

from ..config import Config
from ..providers import DisplayProvider
from ..session import DisplaySession


def save_config(config: Config, provider: DisplayProvider) -> Path:
    """
    Save the current configuration of the active displays.

    Ignored displays are not part of the snapshot. Any earlier snapshot
    for the same set of displays is replaced.

    Returns:
        Path of the written snapshot
    """
    logger = logging.getLogger(__name__)
    session = DisplaySession.open(config, provider)

    logger.debug(f"Saving screen config to {session.snapshot_path}")
    path = session.store.save(session.fingerprint, session.active)

    print(f"Saved configuration of {len(session.active)} head(s) to {path}")
    return path
