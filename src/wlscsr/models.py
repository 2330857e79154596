"""
Display identity and geometry value types.

A display is identified by its (make, model, serial) triple. Compositor
output names (e.g. "DP-1") are session-scoped and are never used as
identity.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional

# Transform codes as used by wlroots/Hyprland
TRANSFORM_NORMAL = 0
TRANSFORM_NAMES = [
    "normal",
    "90",
    "180",
    "270",
    "flipped",
    "flipped-90",
    "flipped-180",
    "flipped-270",
]


@dataclass(frozen=True, order=True)
class DisplayIdentity:
    """
    Immutable hardware identity of a display.

    Field order defines the canonical ordering (make, then model, then
    serial), which is shared by fingerprinting and reconciliation.
    """
    make: str
    model: str
    serial: str

    def __str__(self) -> str:
        return f"{self.make} / {self.model} / {self.serial}"


@dataclass
class GeometryConfig:
    """Mode, position and output transform of an enabled display."""
    width: int
    height: int
    refresh_rate: float
    x: int
    y: int
    scale: float
    transform: int = TRANSFORM_NORMAL
    vrr: bool = False

    def __post_init__(self) -> None:
        if not 0 <= self.transform < len(TRANSFORM_NAMES):
            raise ValueError(f"Invalid transform code: {self.transform}")

    @property
    def transform_name(self) -> str:
        """wlroots name of the transform (e.g. "flipped-90")."""
        return TRANSFORM_NAMES[self.transform]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            'width': self.width,
            'height': self.height,
            'refresh_rate': self.refresh_rate,
            'x': self.x,
            'y': self.y,
            'scale': self.scale,
            'transform': self.transform,
            'vrr': self.vrr,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GeometryConfig':
        """
        Create from JSON dict.

        Raises:
            ValueError: If a field is missing or has the wrong type
        """
        try:
            config = cls(
                width=_typed(data['width'], int),
                height=_typed(data['height'], int),
                refresh_rate=float(_typed(data['refresh_rate'], (int, float))),
                x=_typed(data['x'], int),
                y=_typed(data['y'], int),
                scale=float(_typed(data['scale'], (int, float))),
                transform=_typed(data['transform'], int),
                vrr=_typed(data['vrr'], bool),
            )
        except KeyError as e:
            raise ValueError(f"Missing geometry field: {e}") from e
        return config


@dataclass
class DisplayHandle:
    """
    A connected display.

    ``name`` is the compositor's current label for the output and is None
    for records loaded from a snapshot. ``config`` is None iff the display
    is disabled.
    """
    identity: DisplayIdentity
    name: Optional[str] = None
    config: Optional[GeometryConfig] = field(default=None)

    @property
    def make(self) -> str:
        return self.identity.make

    @property
    def model(self) -> str:
        return self.identity.model

    @property
    def serial(self) -> str:
        return self.identity.serial

    @property
    def enabled(self) -> bool:
        return self.config is not None

    def with_name(self, name: Optional[str]) -> 'DisplayHandle':
        """Copy of this record bound to another output name."""
        return replace(self, name=name)

    def disabled(self) -> 'DisplayHandle':
        """Copy of this record with its configuration cleared."""
        return replace(self, config=None)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to the snapshot record format.

        The output name is deliberately omitted since it is not stable
        across sessions.
        """
        data: Dict[str, Any] = {
            'make': self.make,
            'model': self.model,
            'serial': self.serial,
        }
        if self.config is not None:
            data['config'] = self.config.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DisplayHandle':
        """
        Create from a snapshot record.

        Raises:
            ValueError: If the record is malformed
        """
        if not isinstance(data, dict):
            raise ValueError(f"Snapshot record must be an object, got {type(data).__name__}")
        try:
            identity = DisplayIdentity(
                make=_typed(data['make'], str),
                model=_typed(data['model'], str),
                serial=_typed(data['serial'], str),
            )
        except KeyError as e:
            raise ValueError(f"Missing identity field: {e}") from e

        raw_config = data.get('config')
        config = None
        if raw_config is not None:
            if not isinstance(raw_config, dict):
                raise ValueError("'config' must be an object")
            config = GeometryConfig.from_dict(raw_config)
        return cls(identity=identity, config=config)


def canonical_sort(displays: Iterable[DisplayHandle]) -> List[DisplayHandle]:
    """Sort displays by identity (make, model, serial)."""
    return sorted(displays, key=lambda d: d.identity)


def _typed(value: Any, expected):
    # bool is a subclass of int, so reject it where a number is expected
    if isinstance(value, bool) and expected is not bool:
        raise ValueError(f"Expected {expected}, got bool")
    if not isinstance(value, expected):
        raise ValueError(f"Expected {expected}, got {type(value).__name__}")
    return value
