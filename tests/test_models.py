"""Tests for identity and geometry value types."""

import pytest

from wlscsr.models import DisplayHandle, DisplayIdentity, GeometryConfig, canonical_sort

from conftest import make_display, make_geometry


def test_identity_ordering_is_make_model_serial():
    identities = [
        DisplayIdentity("B", "A", "A"),
        DisplayIdentity("A", "B", "A"),
        DisplayIdentity("A", "A", "B"),
        DisplayIdentity("A", "A", "A"),
    ]
    assert sorted(identities) == [
        DisplayIdentity("A", "A", "A"),
        DisplayIdentity("A", "A", "B"),
        DisplayIdentity("A", "B", "A"),
        DisplayIdentity("B", "A", "A"),
    ]


def test_canonical_sort_ignores_names():
    displays = [
        make_display("C", "D", "2", name="DP-1"),
        make_display("A", "B", "1", name="DP-2"),
    ]
    assert [d.name for d in canonical_sort(displays)] == ["DP-2", "DP-1"]


def test_to_dict_omits_name():
    display = make_display("A", "B", "1", name="DP-1", config=make_geometry())
    data = display.to_dict()
    assert "name" not in data
    assert data["config"]["width"] == 1920


def test_to_dict_omits_config_for_disabled_display():
    assert make_display("A", "B", "1", name="DP-1").to_dict() == {
        "make": "A", "model": "B", "serial": "1",
    }


def test_from_dict_restores_record():
    data = {
        "make": "A", "model": "B", "serial": "1",
        "config": {
            "width": 2560, "height": 1440, "refresh_rate": 143.998,
            "x": 10, "y": 20, "scale": 1.25, "transform": 5, "vrr": True,
        },
    }
    display = DisplayHandle.from_dict(data)
    assert display.name is None
    assert display.identity == DisplayIdentity("A", "B", "1")
    assert display.config.transform_name == "flipped-90"
    assert display.config.vrr is True


@pytest.mark.parametrize("record", [
    {"make": "A", "model": "B"},
    {"make": "A", "model": "B", "serial": 3},
    {"make": "A", "model": "B", "serial": "1", "config": {"width": 1}},
    {"make": "A", "model": "B", "serial": "1", "config": "off"},
    ["A", "B", "1"],
])
def test_from_dict_rejects_malformed_records(record):
    with pytest.raises(ValueError):
        DisplayHandle.from_dict(record)


def test_geometry_rejects_invalid_transform():
    with pytest.raises(ValueError):
        make_geometry(transform=8)


def test_with_name_and_disabled_return_copies():
    display = make_display("A", "B", "1", config=make_geometry())
    renamed = display.with_name("DP-9")
    off = renamed.disabled()
    assert display.name is None
    assert renamed.name == "DP-9" and renamed.enabled
    assert off.name == "DP-9" and not off.enabled
    assert isinstance(renamed.config, GeometryConfig)
