"""
Common exception classes for wlscsr.

Provides domain-specific exceptions for consistent error handling across modules.
All exceptions inherit from WlscsrError for unified catching at CLI level.
"""

from typing import Optional


class WlscsrError(Exception):
    """
    Base exception for all wlscsr errors.

    All domain-specific exceptions inherit from this class, allowing
    callers to catch all wlscsr errors with a single except clause.
    """
    pass


# ============================================================================
# Configuration Errors
# ============================================================================

class ConfigError(WlscsrError):
    """
    Configuration-related errors.

    Raised when:
    - Config file is not valid TOML
    - Config file contains unknown sections or keys
    - Lid rules are missing 'file' or 'head'
    """
    pass


class ConfigValidationError(ConfigError):
    """
    Config value validation failed.

    Raised when a config value is present but invalid (e.g., unknown
    backend name, non-positive timeout, unknown log level).
    """
    pass


# ============================================================================
# Provider Errors
# ============================================================================

class ProviderError(WlscsrError):
    """
    Display provider errors.

    Base class for failures while enumerating displays or applying a
    configuration through a backend. Always fatal to the current operation.
    """
    pass


class ProviderNotFoundError(ProviderError):
    """
    Backend tool or socket is not available.

    Raised when the configured executable is not in PATH or the
    compositor socket does not exist.
    """
    pass


class ProviderCommunicationError(ProviderError):
    """
    Failed to communicate with the backend.

    Raised when a command exits non-zero, times out, or an IPC
    request is refused.
    """
    pass


class ProviderOutputError(ProviderError):
    """Backend returned output that could not be parsed."""
    pass


# ============================================================================
# Snapshot Errors
# ============================================================================

class SnapshotError(WlscsrError):
    """
    Snapshot store errors.

    Raised when reading or writing a persisted display snapshot fails.
    """

    def __init__(self, message: str, path=None) -> None:
        super().__init__(message)
        self.path = path


class SnapshotNotFoundError(SnapshotError):
    """No snapshot has been saved for this set of displays."""
    pass


class SnapshotCorruptError(SnapshotError):
    """Snapshot file exists but its content cannot be decoded."""
    pass


class SnapshotWriteError(SnapshotError):
    """Snapshot file could not be written."""
    pass


# ============================================================================
# Reconciliation Errors
# ============================================================================

class ReconciliationError(WlscsrError):
    """
    A saved snapshot could not be matched onto the connected displays.

    The underlying failure (e.g. SnapshotNotFoundError) is available as
    ``cause`` and is also chained as ``__cause__``.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class LengthMismatchError(ReconciliationError):
    """Snapshot and connected displays differ in count."""

    def __init__(self, message: str, expected: int, actual: int) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class IdentityMismatchError(ReconciliationError):
    """Snapshot and connected displays disagree on an identity."""

    def __init__(self, message: str, index: int, saved, current) -> None:
        super().__init__(message)
        self.index = index
        self.saved = saved
        self.current = current
