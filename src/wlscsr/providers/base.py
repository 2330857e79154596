"""
Display provider interface.

A provider enumerates the compositor's outputs and applies configurations
to them. Backend-specific command syntax stays inside each provider.
"""

import json
import logging
import subprocess
from abc import ABC, abstractmethod
from typing import Any, List, Sequence

from ..exceptions import (
    ProviderCommunicationError,
    ProviderNotFoundError,
    ProviderOutputError,
)
from ..fallback import FallbackPlacement, fallback_layout
from ..models import DisplayHandle


class DisplayProvider(ABC):
    """Abstract base class for display backends."""

    name = "abstract"

    def __init__(self, timeout: int = 10) -> None:
        self.timeout = timeout
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def enumerate(self) -> List[DisplayHandle]:
        """
        List all connected displays, enabled or not.

        Raises:
            ProviderError: If the backend cannot be queried
        """
        pass

    @abstractmethod
    def apply(self, displays: Sequence[DisplayHandle]) -> None:
        """
        Apply per-display configurations in one batch.

        Displays without a config are switched off; displays without a
        name are skipped.

        Raises:
            ProviderError: If the backend rejects the batch
        """
        pass

    @abstractmethod
    def apply_layout(self, layout: Sequence[FallbackPlacement]) -> None:
        """Apply a fallback layout in one batch."""
        pass

    def apply_fallback(self, active_names: Sequence[str], inactive_names: Sequence[str]) -> None:
        """
        Switch active outputs on in a generic left-to-right layout and
        inactive outputs off.
        """
        self.apply_layout(fallback_layout(active_names, inactive_names))

    def _run_command(self, cmd: List[str], capture: bool = True) -> str:
        """
        Run a backend command.

        Args:
            cmd: Command to run as list of strings
            capture: Whether stdout is needed (otherwise discarded)

        Returns:
            Captured stdout ("" when not captured)

        Raises:
            ProviderNotFoundError: If the executable is missing
            ProviderCommunicationError: If the command fails or times out
        """
        cmd_str = ' '.join(cmd)  # For logging purposes
        self.logger.debug(f"Executing {cmd_str}")

        try:
            result = subprocess.run(
                cmd,
                stdout=subprocess.PIPE if capture else subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise ProviderCommunicationError(
                f"Timeout after {e.timeout}s running: {cmd_str}"
            ) from e
        except FileNotFoundError as e:
            raise ProviderNotFoundError(
                f"Could not find '{cmd[0]}' command.\n"
                f"Make sure {cmd[0]} is installed and in PATH."
            ) from e
        except OSError as e:
            raise ProviderCommunicationError(f"Failed to execute {cmd_str}: {e}") from e

        if result.returncode != 0:
            error_msg = f"{cmd[0]} failed with exit code {result.returncode}"
            if result.stderr and result.stderr.strip():
                error_msg += f": {result.stderr.strip()}"
            raise ProviderCommunicationError(error_msg)

        return result.stdout or ""

    def _parse_json(self, output: str) -> List[Any]:
        """Decode a JSON array of outputs."""
        try:
            data = json.loads(output)
        except json.JSONDecodeError as e:
            raise ProviderOutputError(
                f"Failed to parse {self.name} JSON output: {e}\n"
                "The backend returned invalid JSON. This may indicate a version mismatch."
            ) from e
        if not isinstance(data, list):
            raise ProviderOutputError(
                f"Expected a JSON array from {self.name}, got {type(data).__name__}"
            )
        return data


def format_number(value: float) -> str:
    """Render a number in its shortest form ("60", "59.951", "1.5")."""
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text
