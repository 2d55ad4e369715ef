from __future__ import annotations

from typing import Optional

import numpy as np

from .types import Insight, InsightContext
from .config import InsightConfig
from ...core import timegrid, utils
from ...core.exceptions import GridError, require
from ...core.types import ComparisonSeries
from .. import series as series_mod
from ..summary import percent_change


def peak_time(
    today: ComparisonSeries, *, config: InsightConfig, context: InsightContext
) -> Optional[Insight]:
    top = series_mod.peak_slot(today.raw)
    if top is None:
        return None
    window = series_mod.peak_window(today.raw)
    msg = f"Sales peaked in the {top.label} slot at {top.value:,.2f}."
    metrics = {"peak_slot_value": top.value}
    if window is not None:
        msg += f" The busiest two hours were {window.label} ({window.total:,.2f})."
        metrics["peak_window_total"] = window.total
    return Insight(
        id="peak_time",
        category="timing",
        title="Peak trading time",
        message=msg,
        metrics=metrics,
        extras={"peak_slot": top.label, "peak_window": window.label if window else None},
    )


def comparison_delta(
    today: ComparisonSeries, *, config: InsightConfig, context: InsightContext
) -> Optional[Insight]:
    comp = context.comparison
    if comp is None:
        return None
    cutoff = utils.last_observed_index(today.raw)
    if cutoff < 0:
        return None
    current = float(np.sum(today.raw[: cutoff + 1]))
    baseline = series_mod.value_at(comp, cutoff)
    pct = percent_change(current, baseline)
    if pct is None:
        return None
    at = timegrid.end_label(cutoff)
    if pct >= 0:
        msg = f"Sales to {at} are {pct:.1f}% ahead of {comp.label}."
        severity = "info"
    else:
        msg = f"Sales to {at} are {abs(pct):.1f}% behind {comp.label}."
        severity = "notice"
    return Insight(
        id="comparison_delta",
        category="comparison",
        title="Against comparison",
        message=msg,
        severity=severity,  # type: ignore[arg-type]
        metrics={"delta_pct": pct, "today": current, "comparison": float(baseline or 0.0)},
    )


def morning_afternoon_split(
    today: ComparisonSeries, *, config: InsightConfig, context: InsightContext
) -> Optional[Insight]:
    split = timegrid.slot_index(config.morning_end)
    require(split is not None, f"morning_end {config.morning_end!r} is not a grid slot", GridError)
    raw = np.asarray(today.raw, dtype=float)
    total = float(raw.sum())
    if total <= 0:
        return None
    morning = float(raw[:split].sum())
    afternoon = total - morning
    morning_pct = morning / total * 100.0
    return Insight(
        id="morning_afternoon_split",
        category="mix",
        title="Morning vs afternoon",
        message=(
            f"{morning_pct:.0f}% of revenue came before {config.morning_end} "
            f"({morning:,.2f}) and {100.0 - morning_pct:.0f}% after ({afternoon:,.2f})."
        ),
        metrics={
            "morning": morning,
            "afternoon": afternoon,
            "morning_share_pct": morning_pct,
        },
    )


def historical_average(
    today: ComparisonSeries, *, config: InsightConfig, context: InsightContext
) -> Optional[Insight]:
    history = context.history
    if len(history) < max(config.min_history_days, 1):
        return None
    avg = float(np.mean([d.total_sales for d in history]))
    return Insight(
        id="historical_average",
        category="history",
        title="Historical daily average",
        message=f"The historical daily average is {avg:,.2f} across {len(history)} trading days.",
        metrics={"daily_average": avg, "days": float(len(history))},
    )
