"""Tests for the half-hourly time grid: labels, inverse lookup, loose headers."""

import pytest

from salesdatalogic.core import canon, timegrid
from salesdatalogic.core.exceptions import GridError


def test_grid_shape_and_bounds():
    assert len(timegrid.TIME_SLOTS) == canon.SLOT_COUNT == 28
    assert timegrid.TIME_SLOTS[0] == "05:00"
    assert timegrid.TIME_SLOTS[1] == "05:30"
    assert timegrid.TIME_SLOTS[27] == "18:30"
    assert list(timegrid.TIME_SLOTS) == sorted(timegrid.TIME_SLOTS)


def test_slot_index_inverts_slot_label():
    for i in range(canon.SLOT_COUNT):
        assert timegrid.slot_index(timegrid.slot_label(i)) == i


def test_slot_index_not_found_is_distinct_from_zero():
    assert timegrid.slot_index("99:99") is None
    assert timegrid.slot_index("04:30") is None
    assert timegrid.slot_index("19:00") is None
    assert timegrid.slot_index("05:00") == 0


def test_slot_label_rejects_off_grid_index():
    with pytest.raises(GridError):
        timegrid.slot_label(28)
    with pytest.raises(GridError):
        timegrid.slot_label(-1)


def test_normalise_label_accepts_loose_spellings():
    assert timegrid.normalise_label("5:00") == "05:00"
    assert timegrid.normalise_label(" 05:30 ") == "05:30"
    assert timegrid.normalise_label("06:00:00") == "06:00"
    assert timegrid.normalise_label("5am") is None
    assert timegrid.normalise_label("04:30") is None
    assert timegrid.normalise_label(None) is None


def test_window_label_ends_after_last_slot():
    assert timegrid.window_label(10, 4) == "10:00 - 12:00"
    assert timegrid.window_label(27, 1) == "18:30 - 19:00"
