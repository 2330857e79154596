"""
Fingerprinting of connected display sets.

The fingerprint is a SHA-256 digest over the canonically sorted identities
of the active displays. It keys the snapshot store, so it must depend only
on the multiset of identities: not on output names, enumeration order or
geometry.
"""

import hashlib
import struct
from typing import Iterable

from .models import DisplayHandle, DisplayIdentity

# Counts and lengths are fed as unsigned 64-bit little-endian integers
_LENGTH = struct.Struct("<Q")


def compute_fingerprint(identities: Iterable[DisplayIdentity]) -> bytes:
    """
    Compute the raw digest for a set of display identities.

    Args:
        identities: Identities of the active displays, in any order

    Returns:
        32-byte SHA-256 digest
    """
    ordered = sorted(identities)
    hasher = hashlib.sha256()
    hasher.update(_LENGTH.pack(len(ordered)))

    for identity in ordered:
        for value in (identity.make, identity.model, identity.serial):
            encoded = value.encode("utf-8")
            hasher.update(_LENGTH.pack(len(encoded)))
            hasher.update(encoded)

    return hasher.digest()


def fingerprint_displays(displays: Iterable[DisplayHandle]) -> str:
    """Lowercase hex fingerprint of a set of displays."""
    return compute_fingerprint(d.identity for d in displays).hex()
