"""Dashboard composition from an explicit state value."""

import pandas as pd
import pytest

from salesdatalogic.analytics.comparison import ComparisonMode, ComparisonParams
from salesdatalogic.analytics.dashboard import DashboardState, build_dashboard
from salesdatalogic.analytics.summary import kpi_map
from salesdatalogic.core import canon
from salesdatalogic.core.exceptions import GridError


def _sales(values):
    v = [0.0] * canon.SLOT_COUNT
    v[: len(values)] = values
    return v


@pytest.fixture
def state():
    return DashboardState(reference_date=pd.Timestamp("2024-01-29"))


def test_comparison_only_without_today(state, three_mondays):
    view = build_dashboard(state, three_mondays)
    assert view.comparison.ok
    assert view.comparison.series[0].label == "Average Monday"
    assert view.today is None
    assert view.kpis == []
    assert view.insights == []
    assert view.projection is None


def test_full_view(state, three_mondays):
    view = build_dashboard(state.with_today(_sales([10, 20, 0, 30])), three_mondays)
    assert view.today.cumulative[3] == 60.0
    assert view.today.cumulative[4] is None
    kpis = kpi_map(view.kpis)
    # average Monday cumulative at slot 3 is 25
    assert kpis["vs_comparison_pct"].value == pytest.approx(140.0)
    assert view.projection.method == "weekday_pattern"
    assert view.projection.sample_days == 3
    assert kpis["projected_total"].value == pytest.approx(60.0)
    assert {i.id for i in view.insights} >= {"peak_time", "comparison_delta"}


def test_comparison_error_keeps_kpis_without_baseline(state, three_mondays):
    s = state.with_mode(ComparisonMode.SPECIFIC_DATES, ComparisonParams(selected_ids=["1999-01-01"]))
    view = build_dashboard(s.with_today(_sales([10])), three_mondays)
    assert view.comparison.error is not None
    assert kpi_map(view.kpis)["vs_comparison_pct"].value is None
    assert "comparison_delta" not in {i.id for i in view.insights}


def test_state_is_immutable(state):
    moved = state.with_mode("same_day_last_week")
    assert moved.mode is ComparisonMode.SAME_DAY_LAST_WEEK
    assert state.mode is ComparisonMode.WEEKDAY_AVERAGE
    with pytest.raises(GridError):
        state.with_today([1.0, 2.0])
