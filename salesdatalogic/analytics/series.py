from __future__ import annotations
from typing import List, Optional, Sequence

import numpy as np

from ..core import canon, timegrid, utils
from ..core.types import ComparisonSeries, PeakSlot, PeakWindow

TODAY_LABEL = "Today"


def cumulative_with_cutoff(
    sales: Sequence[float], cutoff: Optional[int] = None
) -> List[Optional[float]]:
    """
    Running total of ``sales``.

    Entries after ``cutoff`` are None so charts stop at the last observed
    slot instead of drawing a flat line into the future. Without a cutoff
    the running total spans the full vector; a cutoff of -1 means nothing
    has been observed yet.
    """
    arr = np.asarray(sales, dtype=float)
    running = np.cumsum(arr).tolist()
    if cutoff is None:
        return running
    return [v if i <= cutoff else None for i, v in enumerate(running)]


def peak_slot(sales: Sequence[float]) -> Optional[PeakSlot]:
    arr = np.asarray(sales, dtype=float)
    if arr.size == 0 or float(arr.max()) <= 0:
        return None
    i = int(arr.argmax())
    return PeakSlot(index=i, value=float(arr[i]), label=timegrid.slot_label(i))


def peak_window(
    sales: Sequence[float], width: int = canon.PEAK_WINDOW_SLOTS
) -> Optional[PeakWindow]:
    """
    Busiest run of ``width`` consecutive slots (2 hours by default).

    Window starts run over 0..len-width-1, so the slot after every window
    exists for its end label. The earliest maximum wins. None when the
    vector is too short or the best window sums to 0.
    """
    arr = np.asarray(sales, dtype=float)
    if arr.size < width:
        return None
    sums = np.convolve(arr, np.ones(width), mode="valid")[: arr.size - width]
    if sums.size == 0 or float(sums.max()) <= 0:
        return None
    start = int(sums.argmax())
    return PeakWindow(
        start=start,
        total=float(sums[start]),
        label=timegrid.window_label(start, width),
    )


def make_series(
    label: str,
    sales: Sequence[float],
    *,
    cutoff: Optional[int] = None,
    dashed: bool = False,
    source_id: Optional[str] = None,
) -> ComparisonSeries:
    raw = utils.as_grid_vector(sales)
    return ComparisonSeries(
        label=label,
        raw=raw.tolist(),
        cumulative=cumulative_with_cutoff(raw, cutoff),
        dashed=dashed,
        source_id=source_id,
    )


def today_series(sales: Sequence[float], label: str = TODAY_LABEL) -> ComparisonSeries:
    """Series for a partially elapsed day, cut off at the last observed slot."""
    return make_series(label, sales, cutoff=utils.last_observed_index(sales))


def value_at(series: ComparisonSeries, index: int) -> Optional[float]:
    """Cumulative value of ``series`` at ``index`` (None when out of range or unobserved)."""
    if index < 0 or index >= len(series.cumulative):
        return None
    return series.cumulative[index]
