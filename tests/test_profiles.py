"""Weekday heatmap profile and hourly collapse."""

import pytest

from salesdatalogic.analytics import profiles
from salesdatalogic.core import canon, timegrid


def test_weekday_profile_mean_and_order(three_mondays, flat_fridays):
    prof = profiles.weekday_profile(flat_fridays + three_mondays)
    # Monday first regardless of input order; absent weekdays are dropped
    assert list(prof.index) == ["Monday", "Friday"]
    assert list(prof.columns) == list(timegrid.TIME_SLOTS)
    assert prof.loc["Monday", "05:00"] == pytest.approx(20.0)
    assert prof.loc["Monday", "05:30"] == pytest.approx(5.0)
    assert prof.loc["Friday", "18:30"] == pytest.approx(10.0)


def test_weekday_profile_median(three_mondays, make_day):
    history = three_mondays + [make_day("2024-01-22", {0: 1000.0})]
    prof = profiles.weekday_profile(history, agg="median")
    assert prof.loc["Monday", "05:00"] == pytest.approx(25.0)


def test_weekday_profile_empty():
    prof = profiles.weekday_profile([])
    assert prof.empty
    assert len(prof.columns) == canon.SLOT_COUNT


def test_hourly_totals():
    sales = [float(i) for i in range(canon.SLOT_COUNT)]
    hourly = profiles.hourly_totals(sales)
    assert len(hourly) == canon.SLOT_COUNT // 2
    assert hourly.index[0] == "05:00"
    assert hourly.index[-1] == "18:00"
    assert hourly["05:00"] == 1.0
    assert hourly["18:00"] == 26.0 + 27.0
    assert hourly.sum() == sum(sales)
