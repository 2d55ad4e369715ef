from __future__ import annotations
from datetime import datetime
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from ..core import canon, utils
from ..core.types import DailySales, ProjectionResult
from ..io import dates, formats


def run_rate_projection(sales: Sequence[float], cutoff: Optional[int] = None) -> float:
    """Flat extrapolation: average per elapsed slot times the number of grid slots."""
    arr = utils.as_grid_vector(sales)
    if cutoff is None:
        cutoff = utils.last_observed_index(arr)
    if cutoff < 0:
        return 0.0
    sum_so_far = float(arr[: cutoff + 1].sum())
    return sum_so_far / (cutoff + 1) * canon.SLOT_COUNT


def weekday_average(
    history: Sequence[DailySales], weekday: str, *, exclude_id: Optional[str] = None
) -> tuple[np.ndarray, int]:
    """Per-slot mean over ``history`` days falling on ``weekday``; also returns the day count."""
    frame = formats.to_frame(history)
    sel = frame[frame["day_of_week"] == weekday]
    if exclude_id is not None:
        sel = sel[sel["id"] != exclude_id]
    if sel.empty:
        return utils.zero_vector(), 0
    mean = np.mean(formats.frame_rows(sel), axis=0)
    return np.asarray(mean, dtype=float), int(len(sel))


def weekday_pattern_projection(
    sales: Sequence[float],
    pattern: Sequence[float],
    cutoff: Optional[int] = None,
) -> tuple[float, float]:
    """
    Scale the historical intraday shape by today's performance so far.

    factor = observed / pattern over the elapsed slots (1.0 when the pattern
    has nothing there); remaining slots are pattern * factor. Returns
    (projected_total, factor).
    """
    arr = utils.as_grid_vector(sales)
    shape = utils.as_grid_vector(pattern)
    if cutoff is None:
        cutoff = utils.last_observed_index(arr)
    sum_so_far = float(arr[: cutoff + 1].sum())
    hist_partial = float(shape[: cutoff + 1].sum())
    factor = sum_so_far / hist_partial if hist_partial > 0 else 1.0
    remaining = float((shape[cutoff + 1 :] * factor).sum())
    return sum_so_far + remaining, factor


def estimate_projection(
    sales: Sequence[float],
    history: Sequence[DailySales],
    reference_date: datetime,
) -> ProjectionResult:
    """
    Project the full-day total for a partially elapsed day.

    Prefers the weekday pattern when at least MIN_PATTERN_DAYS earlier days
    share the reference weekday (the reference day's own record is left
    out); otherwise falls back to the run rate.
    """
    arr = utils.as_grid_vector(sales)
    cutoff = utils.last_observed_index(arr)
    if cutoff < 0:
        return ProjectionResult(total=0.0, method="none")

    sum_so_far = float(arr[: cutoff + 1].sum())
    ref = pd.Timestamp(reference_date)
    ref = ref.tz_localize(canon.TZ) if ref.tz is None else ref.tz_convert(canon.TZ)
    weekday = canon.WEEKDAYS[ref.weekday()]

    pattern, n_days = weekday_average(history, weekday, exclude_id=dates.to_id(ref))
    if n_days >= canon.MIN_PATTERN_DAYS:
        total, factor = weekday_pattern_projection(arr, pattern, cutoff)
        return ProjectionResult(
            total=total,
            method="weekday_pattern",
            sum_so_far=sum_so_far,
            cutoff=cutoff,
            performance_factor=factor,
            sample_days=n_days,
        )

    return ProjectionResult(
        total=run_rate_projection(arr, cutoff),
        method="run_rate",
        sum_so_far=sum_so_far,
        cutoff=cutoff,
        sample_days=n_days,
    )


def project_day_sales(
    sales: Sequence[float],
    history: Sequence[DailySales],
    reference_date: datetime,
) -> float:
    return estimate_projection(sales, history, reference_date).total
