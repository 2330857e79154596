"""Tests for snapshot reconciliation."""

import json

import pytest

from wlscsr.exceptions import (
    IdentityMismatchError,
    LengthMismatchError,
    ReconciliationError,
    SnapshotCorruptError,
    SnapshotNotFoundError,
)
from wlscsr.fingerprint import fingerprint_displays
from wlscsr.reconcile import Reconciler

from conftest import make_display, make_geometry


@pytest.fixture
def reconciler(store):
    return Reconciler(store)


class TestReconcile:

    def test_names_follow_identity_after_swap(self, store, reconciler):
        g1 = make_geometry(2560, 1440)
        g2 = make_geometry(1920, 1080, x=2560)
        saved = [
            make_display("A", "B", "1", name="DP-1", config=g1),
            make_display("C", "D", "2", name="DP-2", config=g2),
        ]
        store.save(fingerprint_displays(saved), saved)

        # Names reassigned and enumeration order swapped on the next boot
        current = [
            make_display("C", "D", "2", name="DP-1", config=make_geometry(640, 480)),
            make_display("A", "B", "1", name="DP-2", config=None),
        ]
        result = reconciler.reconcile(current)

        by_name = {d.name: d for d in result}
        assert set(by_name) == {"DP-1", "DP-2"}
        assert by_name["DP-2"].make == "A"
        assert by_name["DP-2"].config == g1
        assert by_name["DP-1"].make == "C"
        assert by_name["DP-1"].config == g2

    def test_disabled_display_stays_disabled(self, store, reconciler):
        saved = [
            make_display("A", "B", "1", name="DP-1", config=make_geometry()),
            make_display("C", "D", "2", name="DP-2", config=None),
        ]
        store.save(fingerprint_displays(saved), saved)

        result = reconciler.reconcile(saved)
        assert {d.name: d.enabled for d in result} == {"DP-1": True, "DP-2": False}

    def test_unsorted_snapshot_is_sorted_before_matching(self, store, reconciler, two_displays):
        fingerprint = fingerprint_displays(two_displays)
        records = [d.to_dict() for d in reversed(two_displays)]
        store.state_dir.mkdir(parents=True)
        store.path_for(fingerprint).write_text(json.dumps(records))

        result = reconciler.reconcile(two_displays)
        assert [(d.name, d.make) for d in result] == [("DP-1", "A"), ("DP-2", "C")]

    def test_ignored_displays_are_appended_disabled(self, store, reconciler, two_displays):
        store.save(fingerprint_displays(two_displays), two_displays)
        lid = make_display("BOE", "0x0BCA", "", name="eDP-1", config=make_geometry())

        result = reconciler.reconcile(two_displays, [lid])

        assert result[-1].name == "eDP-1"
        assert result[-1].config is None
        assert lid.config is not None

    def test_result_is_independent_of_input_objects(self, store, reconciler, two_displays):
        store.save(fingerprint_displays(two_displays), two_displays)
        result = reconciler.reconcile(two_displays)
        assert all(r is not d for r, d in zip(result, two_displays))


class TestFailures:

    def test_missing_snapshot(self, reconciler, two_displays):
        with pytest.raises(ReconciliationError) as exc_info:
            reconciler.reconcile(two_displays)
        assert isinstance(exc_info.value.cause, SnapshotNotFoundError)
        assert exc_info.value.__cause__ is exc_info.value.cause

    def test_corrupt_snapshot(self, store, reconciler, two_displays):
        store.state_dir.mkdir(parents=True)
        store.path_for(fingerprint_displays(two_displays)).write_text("{broken")

        with pytest.raises(ReconciliationError) as exc_info:
            reconciler.reconcile(two_displays)
        assert isinstance(exc_info.value.cause, SnapshotCorruptError)

    def test_length_mismatch(self, store, reconciler, two_displays):
        # Snapshot with two records filed under a three-display fingerprint
        current = two_displays + [make_display("E", "F", "3", name="DP-3")]
        store.save(fingerprint_displays(current), two_displays)

        with pytest.raises(LengthMismatchError) as exc_info:
            reconciler.reconcile(current)
        assert exc_info.value.expected == 2
        assert exc_info.value.actual == 3

    def test_identity_mismatch_names_index(self, store, reconciler, two_displays):
        current = [two_displays[0], make_display("X", "Y", "9", name="DP-2")]
        store.save(fingerprint_displays(current), two_displays)

        with pytest.raises(IdentityMismatchError) as exc_info:
            reconciler.reconcile(current)

        error = exc_info.value
        assert error.index == 1
        assert error.saved.make == "C"
        assert error.current.make == "X"
        assert "idx 1" in str(error)
