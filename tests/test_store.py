"""Tests for the snapshot store."""

import json
import os
import stat

import pytest

from wlscsr.exceptions import SnapshotCorruptError, SnapshotNotFoundError, SnapshotWriteError
from wlscsr.fingerprint import fingerprint_displays
from wlscsr.store import SnapshotStore

from conftest import make_display, make_geometry


class TestSave:

    def test_creates_state_directory(self, store, state_dir, two_displays):
        assert not state_dir.exists()
        path = store.save("abc", two_displays)
        assert path == state_dir / "abc.json"
        assert path.exists()

    def test_file_is_sorted_and_nameless(self, store):
        displays = [
            make_display("Z", "Z", "9", name="DP-1", config=make_geometry()),
            make_display("A", "A", "1", name="DP-2"),
        ]
        path = store.save(fingerprint_displays(displays), displays)
        data = json.loads(path.read_text())

        assert [r["make"] for r in data] == ["A", "Z"]
        assert all("name" not in record for record in data)
        assert "config" not in data[0]
        assert data[1]["config"] == {
            "width": 1920, "height": 1080, "refresh_rate": 60.0,
            "x": 0, "y": 0, "scale": 1.0, "transform": 0, "vrr": False,
        }

    def test_overwrites_previous_snapshot(self, store):
        store.save("abc", [make_display("A", "B", "1", config=make_geometry(1024, 768))])
        store.save("abc", [make_display("A", "B", "1", config=make_geometry(800, 600))])

        loaded = store.load("abc")
        assert len(loaded) == 1
        assert loaded[0].config.width == 800
        assert [p.name for p in store.state_dir.iterdir()] == ["abc.json"]

    @pytest.mark.parametrize("umask, mode", [(0o022, 0o644), (0o077, 0o600)])
    def test_file_mode_follows_umask(self, store, two_displays, umask, mode):
        previous = os.umask(umask)
        try:
            path = store.save("abc", two_displays)
        finally:
            os.umask(previous)

        assert stat.S_IMODE(path.stat().st_mode) == mode

    def test_write_failure_raises_snapshot_write_error(self, tmp_path, two_displays):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        store = SnapshotStore(blocker / "wlscsr")

        with pytest.raises(SnapshotWriteError):
            store.save("abc", two_displays)


class TestLoad:

    def test_round_trip(self, store, two_displays):
        store.save("abc", two_displays)
        loaded = store.load("abc")

        assert [d.identity for d in loaded] == [d.identity for d in two_displays]
        assert [d.config for d in loaded] == [d.config for d in two_displays]
        assert all(d.name is None for d in loaded)

    def test_missing_snapshot(self, store):
        with pytest.raises(SnapshotNotFoundError) as exc_info:
            store.load("missing")
        assert exc_info.value.path == store.path_for("missing")

    @pytest.mark.parametrize("content", [
        "not json",
        '{"make": "A"}',
        '[{"make": "A", "model": "B"}]',
        '[{"make": "A", "model": "B", "serial": "1", "config": {"width": "wide"}}]',
    ])
    def test_corrupt_snapshot(self, store, state_dir, content):
        state_dir.mkdir(parents=True)
        (state_dir / "abc.json").write_text(content)

        with pytest.raises(SnapshotCorruptError):
            store.load("abc")

    def test_exists(self, store, two_displays):
        assert not store.exists("abc")
        store.save("abc", two_displays)
        assert store.exists("abc")
