from __future__ import annotations
from typing import List, Optional

import numpy as np

from ..core import utils
from ..core.types import KPI, ComparisonSeries, ProjectionResult
from . import series as series_mod


def percent_change(current: float, baseline: Optional[float]) -> Optional[float]:
    if baseline is None or baseline == 0:
        return None
    return (current - baseline) / baseline * 100.0


def summarize_kpis(
    today: ComparisonSeries,
    comparison: Optional[ComparisonSeries] = None,
    projection: Optional[ProjectionResult] = None,
) -> List[KPI]:
    """
    Headline numbers for today's series against the primary comparison.

    The comparison is read at today's cutoff (last observed slot) so a
    partial day is compared like for like.
    """
    raw = np.asarray(today.raw, dtype=float)
    cutoff = utils.last_observed_index(raw)
    total = float(raw[: cutoff + 1].sum()) if cutoff >= 0 else 0.0

    vs_pct: Optional[float] = None
    vs_detail: Optional[str] = None
    if comparison is not None and cutoff >= 0:
        baseline = series_mod.value_at(comparison, cutoff)
        vs_pct = percent_change(total, baseline)
        vs_detail = comparison.label

    active = int(np.count_nonzero(raw))
    avg_active = total / active if active else None

    top = series_mod.peak_slot(raw)
    window = series_mod.peak_window(raw)

    kpis = [
        KPI(id="total_to_date", label="Total Sales", value=total),
        KPI(id="vs_comparison_pct", label="vs. Comparison", value=vs_pct, detail=vs_detail),
        KPI(id="avg_per_active_slot", label="Avg. per Active Slot", value=avg_active),
        KPI(
            id="peak_slot",
            label="Peak Slot",
            value=top.value if top else None,
            detail=top.label if top else None,
        ),
        KPI(
            id="peak_window",
            label="Peak 2-Hour Window",
            value=window.total if window else None,
            detail=window.label if window else None,
        ),
    ]
    if projection is not None:
        kpis.append(
            KPI(
                id="projected_total",
                label="Projected Total",
                value=projection.total,
                detail=projection.method,
            )
        )
    return kpis


def kpi_map(kpis: List[KPI]) -> dict[str, KPI]:
    return {k.id: k for k in kpis}
