"""
Reconciliation of a saved snapshot with the connected displays.

The snapshot provides the geometry, the current enumeration provides the
output names. Matching is by identity only, so a display keeps its saved
configuration even when the compositor has renamed it.
"""

import logging
from typing import List, Sequence

from .exceptions import (
    IdentityMismatchError,
    LengthMismatchError,
    ReconciliationError,
    SnapshotError,
)
from .fingerprint import fingerprint_displays
from .models import DisplayHandle, canonical_sort
from .store import SnapshotStore


class Reconciler:
    """Bind persisted snapshots back onto the current display set."""

    def __init__(self, store: SnapshotStore) -> None:
        self.store = store
        self.logger = logging.getLogger(__name__)

    def reconcile(
        self,
        active: Sequence[DisplayHandle],
        ignored: Sequence[DisplayHandle] = (),
    ) -> List[DisplayHandle]:
        """
        Produce the configuration to apply for the connected displays.

        Args:
            active: Displays taking part in matching
            ignored: Displays excluded for this run; always disabled

        Returns:
            Snapshot records carrying current names, followed by the
            ignored displays with their configuration cleared

        Raises:
            ReconciliationError: If no snapshot could be loaded
            LengthMismatchError: If the snapshot has a different display count
            IdentityMismatchError: If an identity differs from the snapshot
        """
        fingerprint = fingerprint_displays(active)
        path = self.store.path_for(fingerprint)

        try:
            saved = self.store.load(fingerprint)
        except SnapshotError as e:
            raise ReconciliationError(str(e), cause=e) from e

        if len(saved) != len(active):
            raise LengthMismatchError(
                f"Screen config {path} does not match connected heads "
                f"({len(saved)}!={len(active)})",
                expected=len(saved),
                actual=len(active),
            )

        saved = canonical_sort(saved)
        current = canonical_sort(active)

        result: List[DisplayHandle] = []
        for index, (saved_head, head) in enumerate(zip(saved, current)):
            if saved_head.identity != head.identity:
                raise IdentityMismatchError(
                    f"Screen config {path} does not match connected heads "
                    f"(idx {index}: saved {saved_head.identity}, "
                    f"connected {head.identity})",
                    index=index,
                    saved=saved_head.identity,
                    current=head.identity,
                )
            result.append(saved_head.with_name(head.name))

        result.extend(head.disabled() for head in ignored)

        self.logger.debug(f"Restoring config: {result}")
        return result
