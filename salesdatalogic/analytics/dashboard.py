from __future__ import annotations
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import List, Optional, Sequence

from ..core import utils
from ..core.types import KPI, ComparisonResult, ComparisonSeries, DailySales, ProjectionResult
from .comparison import ComparisonMode, ComparisonParams, build_comparison
from .insights import Insight, InsightConfig, generate_insights
from .projection import estimate_projection
from .series import today_series
from .summary import summarize_kpis


@dataclass(frozen=True)
class DashboardState:
    """Everything a dashboard render depends on, passed explicitly."""

    reference_date: datetime
    mode: ComparisonMode = ComparisonMode.WEEKDAY_AVERAGE
    params: ComparisonParams = field(default_factory=ComparisonParams)
    today_sales: Optional[List[float]] = None

    def with_today(self, sales: Sequence[float]) -> "DashboardState":
        return replace(self, today_sales=utils.as_grid_vector(sales).tolist())

    def with_mode(
        self, mode: ComparisonMode | str, params: Optional[ComparisonParams] = None
    ) -> "DashboardState":
        return replace(self, mode=ComparisonMode(mode), params=params or ComparisonParams())


@dataclass
class DashboardView:
    comparison: ComparisonResult
    today: Optional[ComparisonSeries] = None
    kpis: List[KPI] = field(default_factory=list)
    insights: List[Insight] = field(default_factory=list)
    projection: Optional[ProjectionResult] = None


def build_dashboard(
    state: DashboardState,
    history: Sequence[DailySales],
    *,
    config: Optional[InsightConfig] = None,
) -> DashboardView:
    """
    Compose comparison, today's series, projection, KPIs and insights.

    Without today's figures only the comparison is computed; a comparison
    error leaves KPIs comparing against nothing rather than a zero series.
    """
    comparison = build_comparison(state.mode, history, state.reference_date, state.params)
    if state.today_sales is None:
        return DashboardView(comparison=comparison)

    today = today_series(state.today_sales)
    projection = estimate_projection(state.today_sales, history, state.reference_date)
    primary = comparison.primary
    return DashboardView(
        comparison=comparison,
        today=today,
        kpis=summarize_kpis(today, primary, projection),
        insights=generate_insights(today, primary, history=history, config=config),
        projection=projection,
    )
