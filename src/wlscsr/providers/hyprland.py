"""
Hyprland backends.

Both backends speak Hyprland's request language ("j/monitors all",
"keyword monitor ..."); they differ only in transport:
- hyprctl: runs the ``hyprctl`` command-line tool
- hyprland-ipc: writes requests to the compositor's Unix socket
"""

import os
import socket
from abc import abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ..exceptions import (
    ProviderCommunicationError,
    ProviderNotFoundError,
    ProviderOutputError,
)
from ..fallback import FallbackPlacement
from ..models import DisplayHandle, DisplayIdentity, GeometryConfig
from .base import DisplayProvider, format_number


def monitor_keyword(display: DisplayHandle) -> str:
    """Build the ``keyword monitor`` request for one display."""
    config = display.config
    if config is None:
        return f"keyword monitor {display.name},disable"
    return (
        f"keyword monitor {display.name},"
        f"{config.width}x{config.height}@{format_number(config.refresh_rate)},"
        f"{config.x}x{config.y},"
        f"{format_number(config.scale)},"
        f"transform,{config.transform},"
        f"vrr,{1 if config.vrr else 0}"
    )


def placement_keyword(placement: FallbackPlacement) -> str:
    """Build the ``keyword monitor`` request for a fallback placement."""
    if not placement.enabled:
        return f"keyword monitor {placement.name},disable"
    # Hyprland's "auto" position places each output right of the previous one
    return f"keyword monitor {placement.name},preferred,auto,{format_number(placement.scale)}"


class HyprlandProvider(DisplayProvider):
    """Shared request building and parsing for Hyprland transports."""

    def enumerate(self) -> List[DisplayHandle]:
        return self._parse_monitors(self._query("monitors all"))

    def apply(self, displays: Sequence[DisplayHandle]) -> None:
        self._batch(self.build_apply_requests(displays))

    def apply_layout(self, layout: Sequence[FallbackPlacement]) -> None:
        self._batch(self.build_layout_requests(layout))

    def build_apply_requests(self, displays: Sequence[DisplayHandle]) -> List[str]:
        return [monitor_keyword(d) for d in displays if d.name is not None]

    def build_layout_requests(self, layout: Sequence[FallbackPlacement]) -> List[str]:
        return [placement_keyword(p) for p in layout]

    @abstractmethod
    def _query(self, request: str) -> str:
        """Send a JSON query and return the raw reply."""
        pass

    @abstractmethod
    def _batch(self, requests: List[str]) -> None:
        """Send several requests as one batch."""
        pass

    def _parse_monitors(self, output: str) -> List[DisplayHandle]:
        """
        Parse ``monitors all`` JSON format.

        Example output:
        [
          {
            "name": "eDP-1",
            "make": "BOE",
            "model": "0x0BCA",
            "serial": "",
            "width": 2256,
            "height": 1504,
            "refreshRate": 59.99900,
            "x": 0,
            "y": 0,
            "scale": 1.50,
            "transform": 0,
            "disabled": false,
            "vrr": false
          }
        ]
        """
        displays = []
        for info in self._parse_json(output):
            try:
                displays.append(self._make_display(info))
            except (KeyError, TypeError, ValueError) as e:
                raise ProviderOutputError(f"Malformed Hyprland monitor entry: {e}") from e
        return displays

    def _make_display(self, info: Dict[str, Any]) -> DisplayHandle:
        identity = DisplayIdentity(
            make=info["make"],
            model=info["model"],
            serial=info["serial"],
        )
        config = None
        if not info["disabled"]:
            config = GeometryConfig(
                width=int(info["width"]),
                height=int(info["height"]),
                refresh_rate=float(info["refreshRate"]),
                x=int(info["x"]),
                y=int(info["y"]),
                scale=float(info["scale"]),
                transform=int(info["transform"]),
                vrr=bool(info["vrr"]),
            )
        return DisplayHandle(identity=identity, name=info["name"], config=config)


class HyprctlProvider(HyprlandProvider):
    """Enumerate and configure outputs via ``hyprctl``."""

    name = "hyprctl"

    def __init__(self, executable: str = "hyprctl", timeout: int = 10) -> None:
        super().__init__(timeout)
        self.executable = executable

    def _query(self, request: str) -> str:
        return self._run_command([self.executable, "-j", *request.split()])

    def _batch(self, requests: List[str]) -> None:
        if not requests:
            return
        self._run_command(
            [self.executable, "--batch", *(f"{r};" for r in requests)],
            capture=False,
        )


class HyprlandIPCProvider(HyprlandProvider):
    """Enumerate and configure outputs over Hyprland's request socket."""

    name = "hyprland-ipc"

    def __init__(self, socket_path: Optional[Path] = None, timeout: int = 10) -> None:
        super().__init__(timeout)
        self._socket_path = socket_path

    @property
    def socket_path(self) -> Path:
        if self._socket_path is None:
            self._socket_path = self._find_socket()
        return self._socket_path

    @staticmethod
    def _find_socket() -> Path:
        """
        Locate the request socket of the running Hyprland instance.

        Newer Hyprland releases use $XDG_RUNTIME_DIR/hypr/<signature>/,
        older ones /tmp/hypr/<signature>/.
        """
        signature = os.environ.get("HYPRLAND_INSTANCE_SIGNATURE")
        if not signature:
            raise ProviderNotFoundError(
                "HYPRLAND_INSTANCE_SIGNATURE is not set.\n"
                "Make sure Hyprland is running and this command runs inside its session."
            )

        runtime_dir = Path(os.environ.get("XDG_RUNTIME_DIR", f"/run/user/{os.getuid()}"))
        candidates = [
            runtime_dir / "hypr" / signature / ".socket.sock",
            Path("/tmp/hypr") / signature / ".socket.sock",
        ]
        for candidate in candidates:
            if candidate.exists():
                return candidate

        raise ProviderNotFoundError(
            f"Hyprland socket not found. Tried: {', '.join(str(c) for c in candidates)}"
        )

    def _request(self, payload: str) -> str:
        """Send one request and read the reply until the socket closes."""
        self.logger.debug(f"Sending to {self.socket_path}: {payload}")
        chunks = []
        try:
            with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
                sock.settimeout(self.timeout)
                sock.connect(str(self.socket_path))
                sock.sendall(payload.encode("utf-8"))
                while True:
                    chunk = sock.recv(8192)
                    if not chunk:
                        break
                    chunks.append(chunk)
        except socket.timeout as e:
            raise ProviderCommunicationError(
                f"Timeout after {self.timeout}s waiting for Hyprland"
            ) from e
        except OSError as e:
            raise ProviderCommunicationError(
                f"Failed to talk to Hyprland at {self.socket_path}: {e}"
            ) from e

        return b"".join(chunks).decode("utf-8", errors="replace")

    def _query(self, request: str) -> str:
        return self._request(f"j/{request}")

    def _batch(self, requests: List[str]) -> None:
        if not requests:
            return
        reply = self._request("[[BATCH]]" + ";".join(requests))
        failures = [r.strip() for r in reply.split("\n\n") if r.strip() and r.strip() != "ok"]
        if failures:
            raise ProviderCommunicationError(
                f"Hyprland rejected the configuration: {'; '.join(failures)}"
            )
