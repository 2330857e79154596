"""
Per-invocation view of the connected displays.

Enumerates the displays once, applies the lid exclusions and derives the
fingerprint used to locate the snapshot.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

from .config import Config
from .exclusion import partition_displays
from .fingerprint import fingerprint_displays
from .models import DisplayHandle
from .providers import DisplayProvider
from .store import SnapshotStore

logger = logging.getLogger(__name__)


@dataclass
class DisplaySession:
    """Displays, exclusions and snapshot location for one run."""
    provider: DisplayProvider
    store: SnapshotStore
    active: List[DisplayHandle]
    ignored: List[DisplayHandle]
    fingerprint: str

    @classmethod
    def open(cls, config: Config, provider: DisplayProvider) -> 'DisplaySession':
        """
        Enumerate displays and split off the ignored ones.

        Raises:
            ProviderError: If enumeration fails
        """
        displays = provider.enumerate()
        active, ignored = partition_displays(displays, config.lid)
        fingerprint = fingerprint_displays(active)

        logger.debug(
            f"{len(active)} active, {len(ignored)} ignored display(s), "
            f"fingerprint {fingerprint}"
        )
        return cls(
            provider=provider,
            store=SnapshotStore(config.get_state_dir()),
            active=active,
            ignored=ignored,
            fingerprint=fingerprint,
        )

    @property
    def snapshot_path(self) -> Path:
        return self.store.path_for(self.fingerprint)

    @property
    def active_names(self) -> List[str]:
        return [d.name for d in self.active if d.name is not None]

    @property
    def ignored_names(self) -> List[str]:
        return [d.name for d in self.ignored if d.name is not None]
