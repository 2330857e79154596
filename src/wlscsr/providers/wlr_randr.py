"""
wlr-randr backend.

Works with any compositor implementing wlr-output-management
(sway, river, labwc, Hyprland, ...).
"""

from typing import Any, Dict, List, Sequence

from ..exceptions import ProviderOutputError
from ..fallback import FallbackPlacement
from ..models import (
    TRANSFORM_NAMES,
    DisplayHandle,
    DisplayIdentity,
    GeometryConfig,
)
from .base import DisplayProvider, format_number


class WlrRandrProvider(DisplayProvider):
    """Enumerate and configure outputs via ``wlr-randr``."""

    name = "wlr-randr"

    def __init__(self, executable: str = "wlr-randr", timeout: int = 10) -> None:
        super().__init__(timeout)
        self.executable = executable

    def enumerate(self) -> List[DisplayHandle]:
        output = self._run_command([self.executable, "--json"])
        return self._parse_output(output)

    def _parse_output(self, output: str) -> List[DisplayHandle]:
        """
        Parse wlr-randr --json format.

        Example output:
        [
          {
            "name": "DP-1",
            "make": "Dell Inc.",
            "model": "DELL U2720Q",
            "serial": "ABC123",
            "enabled": true,
            "modes": [
              {"width": 3840, "height": 2160, "refresh": 59.997,
               "preferred": true, "current": true}
            ],
            "position": {"x": 0, "y": 0},
            "transform": "normal",
            "scale": 1.5,
            "adaptive_sync": false
          }
        ]
        """
        displays = []
        for info in self._parse_json(output):
            try:
                displays.append(self._make_display(info))
            except (KeyError, TypeError, ValueError) as e:
                raise ProviderOutputError(f"Malformed wlr-randr output entry: {e}") from e
        return displays

    def _make_display(self, info: Dict[str, Any]) -> DisplayHandle:
        identity = DisplayIdentity(
            make=info.get("make") or "",
            model=info.get("model") or "",
            serial=info.get("serial") or "",
        )

        modes = info.get("modes") or []
        config = None
        if info.get("enabled") and modes:
            mode = next((m for m in modes if m.get("current")), modes[0])
            position = info.get("position") or {}
            transform = info.get("transform") or "normal"
            adaptive_sync = info.get("adaptive_sync")
            scale = info.get("scale")
            config = GeometryConfig(
                width=int(mode["width"]),
                height=int(mode["height"]),
                refresh_rate=float(mode["refresh"]),
                x=int(position.get("x", 0)),
                y=int(position.get("y", 0)),
                scale=float(scale) if scale is not None else 1.0,
                transform=(
                    TRANSFORM_NAMES.index(transform) if transform in TRANSFORM_NAMES else 0
                ),
                vrr=bool(adaptive_sync) if adaptive_sync is not None else False,
            )

        return DisplayHandle(identity=identity, name=info["name"], config=config)

    def apply(self, displays: Sequence[DisplayHandle]) -> None:
        self._run_command(self.build_apply_command(displays), capture=False)

    def build_apply_command(self, displays: Sequence[DisplayHandle]) -> List[str]:
        cmd = [self.executable]
        for display in displays:
            if display.name is None:
                continue
            cmd += ["--output", display.name]

            config = display.config
            if config is None:
                cmd.append("--off")
                continue

            cmd += [
                "--on",
                "--mode", f"{config.width}x{config.height}@{format_number(config.refresh_rate)}Hz",
                "--pos", f"{config.x},{config.y}",
                "--scale", format_number(config.scale),
                "--transform", config.transform_name,
                "--adaptive-sync", "enabled" if config.vrr else "disabled",
            ]
        return cmd

    def apply_layout(self, layout: Sequence[FallbackPlacement]) -> None:
        self._run_command(self.build_layout_command(layout), capture=False)

    def build_layout_command(self, layout: Sequence[FallbackPlacement]) -> List[str]:
        cmd = [self.executable]
        for placement in layout:
            cmd += ["--output", placement.name]
            if not placement.enabled:
                cmd.append("--off")
                continue

            cmd += ["--on", "--preferred"]
            if placement.right_of is None:
                cmd += ["--pos", "0,0"]
            else:
                cmd += ["--right-of", placement.right_of]
            cmd += [
                "--scale", format_number(placement.scale),
                "--transform", TRANSFORM_NAMES[placement.transform],
                "--adaptive-sync", "enabled" if placement.vrr else "disabled",
            ]
        return cmd
