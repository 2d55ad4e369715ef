from __future__ import annotations
from typing import Literal, Sequence

import pandas as pd

from ..core import canon, timegrid
from ..core.types import DailySales
from ..io import formats


def weekday_profile(
    history: Sequence[DailySales], agg: Literal["mean", "median"] = "mean"
) -> pd.DataFrame:
    """
    Average day shape per weekday, for heatmap views.

    Returns a DataFrame indexed by weekday name (Monday first, only weekdays
    present in ``history``) with one column per slot label.
    """
    cols = list(timegrid.TIME_SLOTS)
    frame = formats.to_frame(history)
    if frame.empty:
        return pd.DataFrame(columns=cols, index=pd.Index([], name="day_of_week"))

    g = frame[["day_of_week", *cols]].astype({c: float for c in cols}).groupby("day_of_week")[cols]
    out = g.mean() if agg == "mean" else g.median()
    order = [d for d in canon.WEEKDAYS if d in out.index]
    return out.reindex(order)


def hourly_totals(sales: Sequence[float]) -> pd.Series:
    """Collapse a grid vector into per-hour sums labelled 'HH:00' (bar views)."""
    s = pd.Series(list(sales), index=list(timegrid.TIME_SLOTS), dtype=float)
    return s.groupby(s.index.str[:2] + ":00", sort=False).sum()
