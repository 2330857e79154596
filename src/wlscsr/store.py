"""
On-disk snapshot store.

One JSON file per fingerprint, named ``<fingerprint>.json``, holding the
canonically sorted display records without output names. The store is a
plain keyed file store without locking: concurrent saves race and the last
writer wins.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, List

from .exceptions import (
    SnapshotCorruptError,
    SnapshotNotFoundError,
    SnapshotWriteError,
)
from .models import DisplayHandle, canonical_sort


def _default_file_mode() -> int:
    """Mode a plain open() would create files with under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


class SnapshotStore:
    """Load and save display snapshots keyed by fingerprint."""

    def __init__(self, state_dir: Path) -> None:
        self.state_dir = Path(state_dir)
        self.logger = logging.getLogger(__name__)

    def path_for(self, fingerprint: str) -> Path:
        """Get snapshot file path for a fingerprint."""
        return self.state_dir / f"{fingerprint}.json"

    def exists(self, fingerprint: str) -> bool:
        return self.path_for(fingerprint).is_file()

    def save(self, fingerprint: str, displays: Iterable[DisplayHandle]) -> Path:
        """
        Write a snapshot, replacing any previous one for this fingerprint.

        The file is written to a temporary sibling and renamed into place,
        so readers never see a truncated snapshot.

        Args:
            fingerprint: Hex fingerprint of the displays
            displays: Active displays to persist

        Returns:
            Path of the written snapshot

        Raises:
            SnapshotWriteError: If the file cannot be written
        """
        path = self.path_for(fingerprint)
        records = [d.to_dict() for d in canonical_sort(displays)]
        content = json.dumps(records, indent=2) + "\n"

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=f".{fingerprint}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    # mkstemp creates 0600 files
                    os.fchmod(f.fileno(), _default_file_mode())
                    f.write(content)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise SnapshotWriteError(f"Failed to write snapshot {path}: {e}", path) from e

        self.logger.debug(f"Saved {len(records)} display(s) to {path}")
        return path

    def load(self, fingerprint: str) -> List[DisplayHandle]:
        """
        Read the snapshot for a fingerprint.

        Returns:
            Snapshot records in file order, without names

        Raises:
            SnapshotNotFoundError: If no snapshot exists
            SnapshotCorruptError: If the file cannot be decoded
        """
        path = self.path_for(fingerprint)
        self.logger.debug(f"Attempting to load snapshot from {path}")

        try:
            raw = path.read_bytes()
        except FileNotFoundError as e:
            raise SnapshotNotFoundError(
                f"No saved configuration for the connected displays ({path})", path
            ) from e
        except OSError as e:
            raise SnapshotCorruptError(f"Failed to read snapshot {path}: {e}", path) from e

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"expected a list of records, got {type(data).__name__}")
            return [DisplayHandle.from_dict(record) for record in data]
        except (UnicodeDecodeError, ValueError) as e:
            # json.JSONDecodeError is a ValueError
            raise SnapshotCorruptError(f"Snapshot {path} is corrupt: {e}", path) from e
