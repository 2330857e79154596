"""Test configuration and fixtures."""

from pathlib import Path
from typing import List, Optional, Sequence

import pytest

from wlscsr.config import Config, LidRule, StoreConfig
from wlscsr.fallback import FallbackPlacement
from wlscsr.models import DisplayHandle, DisplayIdentity, GeometryConfig
from wlscsr.providers import DisplayProvider
from wlscsr.store import SnapshotStore


def make_geometry(width: int = 1920, height: int = 1080, x: int = 0, **kwargs) -> GeometryConfig:
    """Geometry with sensible defaults for tests."""
    values = dict(
        width=width,
        height=height,
        refresh_rate=60.0,
        x=x,
        y=0,
        scale=1.0,
        transform=0,
        vrr=False,
    )
    values.update(kwargs)
    return GeometryConfig(**values)


def make_display(
    make: str,
    model: str,
    serial: str,
    name: Optional[str] = None,
    config: Optional[GeometryConfig] = None,
) -> DisplayHandle:
    return DisplayHandle(
        identity=DisplayIdentity(make=make, model=model, serial=serial),
        name=name,
        config=config,
    )


class FakeProvider(DisplayProvider):
    """In-memory provider recording what would be applied."""

    name = "fake"

    def __init__(self, displays: Sequence[DisplayHandle] = ()) -> None:
        super().__init__()
        self.displays: List[DisplayHandle] = list(displays)
        self.applied: List[List[DisplayHandle]] = []
        self.layouts: List[List[FallbackPlacement]] = []

    def enumerate(self) -> List[DisplayHandle]:
        return list(self.displays)

    def apply(self, displays: Sequence[DisplayHandle]) -> None:
        self.applied.append(list(displays))

    def apply_layout(self, layout: Sequence[FallbackPlacement]) -> None:
        self.layouts.append(list(layout))


@pytest.fixture
def xdg_dirs(tmp_path: Path, monkeypatch) -> Path:
    """Point XDG config and state directories into a temporary directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    return tmp_path


@pytest.fixture
def state_dir(tmp_path: Path) -> Path:
    return tmp_path / "state" / "wlscsr"


@pytest.fixture
def store(state_dir: Path) -> SnapshotStore:
    return SnapshotStore(state_dir)


@pytest.fixture
def test_config(state_dir: Path) -> Config:
    """Config with an isolated snapshot directory and no lid rules."""
    return Config(store=StoreConfig(state_dir=str(state_dir)))


@pytest.fixture
def lid_file(tmp_path: Path) -> Path:
    """Lid indicator file reporting a closed lid."""
    path = tmp_path / "lid_state"
    path.write_text("state:      closed\n")
    return path


@pytest.fixture
def lid_config(test_config: Config, lid_file: Path) -> Config:
    """Config ignoring eDP-1 while the lid is closed."""
    test_config.lid = [LidRule(file=lid_file, head="eDP-1")]
    return test_config


@pytest.fixture
def two_displays() -> List[DisplayHandle]:
    return [
        make_display("A", "B", "1", name="DP-1", config=make_geometry(2560, 1440)),
        make_display("C", "D", "2", name="DP-2", config=make_geometry(1920, 1080, x=2560)),
    ]
