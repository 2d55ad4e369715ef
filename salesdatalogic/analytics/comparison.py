from __future__ import annotations
import logging
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd
from pydantic import BaseModel

from ..core import canon, timegrid
from ..core.exceptions import ComparisonError, require
from ..core.types import ComparisonResult, ComparisonSeries, DailySales
from ..io import dates, formats
from . import series as series_mod

logger = logging.getLogger(__name__)


class ComparisonMode(str, Enum):
    WEEKDAY_AVERAGE = "weekday_average"
    WEEKDAY_RECORD_HIGH = "weekday_record_high"
    WEEKDAY_RECORD_LOW = "weekday_record_low"
    OVERALL_RECORD_HIGH = "overall_record_high"
    OVERALL_RECORD_LOW = "overall_record_low"
    SPECIFIC_DATES = "specific_dates"
    SAME_DAY_LAST_WEEK = "same_day_last_week"
    SAME_DATE_LAST_YEAR = "same_date_last_year"
    SAME_WEEKDAY_LAST_YEAR = "same_weekday_last_year"


class DateRange(str, Enum):
    ALL = "all"
    THIS_MONTH = "this_month"
    LAST_MONTH = "last_month"
    LAST_3_MONTHS = "last_3_months"
    LAST_6_MONTHS = "last_6_months"
    LAST_12_MONTHS = "last_12_months"
    THIS_YEAR = "this_year"
    LAST_YEAR = "last_year"


class ComparisonParams(BaseModel):
    """Mode-specific inputs; every field is optional and ignored by modes that do not use it."""

    weekday: Optional[str] = None  # defaults to the reference weekday
    date_range: DateRange = DateRange.ALL
    selected_ids: Optional[List[str]] = None


Handler = Callable[[pd.DataFrame, pd.Timestamp, ComparisonParams], ComparisonResult]


def _reference(reference_date: datetime) -> pd.Timestamp:
    ts = pd.Timestamp(reference_date)
    ts = ts.tz_localize(canon.TZ) if ts.tz is None else ts.tz_convert(canon.TZ)
    return ts.normalize()


def _weekday(ts: pd.Timestamp) -> str:
    return canon.WEEKDAYS[ts.weekday()]


def _no_data(reason: str) -> ComparisonResult:
    logger.debug("Comparison produced no data: %s", reason)
    return ComparisonResult(series=[], error=reason)


def record_label(row: pd.Series, prefix: Optional[str] = None) -> str:
    ts = pd.Timestamp(row.name)
    text = f"{row['day_of_week']} {ts.strftime(canon.DISPLAY_DATE_FORMAT)}"
    return f"{prefix} ({text})" if prefix else text


def _row_series(row: pd.Series, prefix: Optional[str] = None) -> ComparisonSeries:
    values = row[list(timegrid.TIME_SLOTS)].astype(float).tolist()
    return series_mod.make_series(record_label(row, prefix), values, source_id=str(row["id"]))


def _frame_series(frame: pd.DataFrame, prefix: Optional[str] = None) -> List[ComparisonSeries]:
    return [_row_series(row, prefix) for _, row in frame.iterrows()]


def range_mask(
    idx: pd.DatetimeIndex, date_range: DateRange, reference: pd.Timestamp
) -> pd.Series:
    """Boolean mask of ``idx`` dates inside ``date_range`` relative to ``reference``."""
    idx = pd.DatetimeIndex(idx)
    date_range = DateRange(date_range)
    if date_range is DateRange.ALL:
        return pd.Series(True, index=idx)

    month_start = reference.replace(day=1)
    if date_range is DateRange.THIS_MONTH:
        start, end = month_start, month_start + pd.DateOffset(months=1)
    elif date_range is DateRange.LAST_MONTH:
        start, end = month_start - pd.DateOffset(months=1), month_start
    elif date_range in (
        DateRange.LAST_3_MONTHS,
        DateRange.LAST_6_MONTHS,
        DateRange.LAST_12_MONTHS,
    ):
        months = {
            DateRange.LAST_3_MONTHS: 3,
            DateRange.LAST_6_MONTHS: 6,
            DateRange.LAST_12_MONTHS: 12,
        }[date_range]
        start, end = reference - pd.DateOffset(months=months), reference + pd.Timedelta(days=1)
    elif date_range is DateRange.THIS_YEAR:
        start = reference.replace(month=1, day=1)
        end = start + pd.DateOffset(years=1)
    else:  # LAST_YEAR
        end = reference.replace(month=1, day=1)
        start = end - pd.DateOffset(years=1)

    return pd.Series((idx >= start) & (idx < end), index=idx)


def _weekday_average(frame: pd.DataFrame, ref: pd.Timestamp, params: ComparisonParams) -> ComparisonResult:
    weekday = params.weekday or _weekday(ref)
    require(weekday in canon.WEEKDAYS, f"Unknown weekday {weekday!r}", ComparisonError)
    sel = frame[frame["day_of_week"] == weekday]
    sel = sel[range_mask(pd.DatetimeIndex(sel.index), params.date_range, ref).to_numpy()]
    if sel.empty:
        return _no_data(f"No historical data for {weekday}s in the selected range.")
    mean = np.mean(formats.frame_rows(sel), axis=0).tolist()
    return ComparisonResult(
        series=[series_mod.make_series(f"Average {weekday}", mean, dashed=True)]
    )


def _ranked(frame: pd.DataFrame, highest: bool) -> pd.DataFrame:
    # stable sort: ties keep store order
    return frame.sort_values("total_sales", ascending=not highest, kind="stable")


def _weekday_records(highest: bool) -> Handler:
    def handler(frame: pd.DataFrame, ref: pd.Timestamp, params: ComparisonParams) -> ComparisonResult:
        weekday = _weekday(ref)
        sel = frame[frame["day_of_week"] == weekday]
        if sel.empty:
            return _no_data(f"No historical data for {weekday}s.")
        top = _ranked(sel, highest).head(canon.WEEKDAY_RECORD_LIMIT)
        return ComparisonResult(series=_frame_series(top))

    return handler


def _overall_records(highest: bool) -> Handler:
    def handler(frame: pd.DataFrame, ref: pd.Timestamp, params: ComparisonParams) -> ComparisonResult:
        if frame.empty:
            return _no_data("No historical data available.")
        ranked = _ranked(frame, highest)
        if params.selected_ids is not None:
            # picks come from the full ranked candidate list
            ranked = ranked[ranked["id"].isin(params.selected_ids)]
            if ranked.empty:
                return _no_data("No record days selected.")
        top = ranked.head(canon.OVERALL_RECORD_LIMIT)
        return ComparisonResult(series=_frame_series(top))

    return handler


def _specific_dates(frame: pd.DataFrame, ref: pd.Timestamp, params: ComparisonParams) -> ComparisonResult:
    wanted = list(dict.fromkeys(params.selected_ids or []))[: canon.SPECIFIC_DATES_LIMIT]
    if not wanted:
        return _no_data("No dates selected for comparison.")
    by_id = frame.reset_index().set_index("id", drop=False)
    by_id = by_id[~by_id.index.duplicated(keep="last")]
    found = [i for i in wanted if i in by_id.index]
    if not found:
        return _no_data("None of the selected dates are in the historical data.")
    picked = by_id.loc[found].set_index(canon.FRAME_INDEX_NAME)
    return ComparisonResult(series=_frame_series(picked))


def _lookup(frame: pd.DataFrame, target: pd.Timestamp, prefix: str) -> ComparisonResult:
    target_id = dates.to_id(target)
    hit = frame[frame["id"] == target_id]
    if hit.empty:
        return _no_data(f"No data for {prefix.lower()} ({target.strftime(canon.DISPLAY_DATE_FORMAT)}).")
    return ComparisonResult(series=[_row_series(hit.iloc[-1], prefix)])


def same_date_last_year(ref: pd.Timestamp) -> pd.Timestamp:
    # 29 Feb maps to 28 Feb
    return ref - pd.DateOffset(years=1)


def same_weekday_last_year(ref: pd.Timestamp) -> pd.Timestamp:
    """
    Same calendar date a year earlier, nudged at most 3 days to land on the
    reference weekday.

    This is the nearest-weekday (364-day) convention: Monday 2024-03-04 maps
    to Monday 2023-03-06, not to the Monday of the week holding 2023-03-04.
    """
    candidate = same_date_last_year(ref)
    diff = ref.weekday() - candidate.weekday()
    if diff > 3:
        diff -= 7
    elif diff < -3:
        diff += 7
    return candidate + pd.Timedelta(days=diff)


def _same_day_last_week(frame: pd.DataFrame, ref: pd.Timestamp, params: ComparisonParams) -> ComparisonResult:
    return _lookup(frame, ref - pd.Timedelta(days=7), "Same Day Last Week")


def _same_date_last_year(frame: pd.DataFrame, ref: pd.Timestamp, params: ComparisonParams) -> ComparisonResult:
    return _lookup(frame, same_date_last_year(ref), "Same Date Last Year")


def _same_weekday_last_year(frame: pd.DataFrame, ref: pd.Timestamp, params: ComparisonParams) -> ComparisonResult:
    return _lookup(frame, same_weekday_last_year(ref), "Same Weekday Last Year")


HANDLERS: Dict[ComparisonMode, Handler] = {
    ComparisonMode.WEEKDAY_AVERAGE: _weekday_average,
    ComparisonMode.WEEKDAY_RECORD_HIGH: _weekday_records(highest=True),
    ComparisonMode.WEEKDAY_RECORD_LOW: _weekday_records(highest=False),
    ComparisonMode.OVERALL_RECORD_HIGH: _overall_records(highest=True),
    ComparisonMode.OVERALL_RECORD_LOW: _overall_records(highest=False),
    ComparisonMode.SPECIFIC_DATES: _specific_dates,
    ComparisonMode.SAME_DAY_LAST_WEEK: _same_day_last_week,
    ComparisonMode.SAME_DATE_LAST_YEAR: _same_date_last_year,
    ComparisonMode.SAME_WEEKDAY_LAST_YEAR: _same_weekday_last_year,
}


def build_comparison(
    mode: ComparisonMode | str,
    history: Sequence[DailySales],
    reference_date: datetime,
    params: Optional[ComparisonParams] = None,
) -> ComparisonResult:
    """
    Compute baseline series for ``mode`` against ``history``.

    Empty filters and missing lookups come back as ``ComparisonResult.error``
    with an empty series list, never as a zero-filled series.
    """
    mode = ComparisonMode(mode)
    params = params or ComparisonParams()
    if not history:
        return _no_data("No historical data available.")
    frame = formats.to_frame(history)
    result = HANDLERS[mode](frame, _reference(reference_date), params)
    logger.debug("Comparison %s produced %d series", mode.value, len(result.series))
    return result


def record_candidates(history: Sequence[DailySales], mode: ComparisonMode | str) -> List[DailySales]:
    """Full ranked list offered for manual selection in the overall record modes."""
    mode = ComparisonMode(mode)
    require(
        mode in (ComparisonMode.OVERALL_RECORD_HIGH, ComparisonMode.OVERALL_RECORD_LOW),
        f"{mode.value} has no ranked candidate list",
        ComparisonError,
    )
    highest = mode is ComparisonMode.OVERALL_RECORD_HIGH
    order = sorted(range(len(history)), key=lambda i: history[i].total_sales, reverse=highest)
    return [history[i] for i in order]


def recent_candidates(history: Sequence[DailySales], n: int = canon.RECENT_CANDIDATES) -> List[DailySales]:
    """Most recent ``n`` records (newest first) for the specific-dates picker."""
    return sorted(history, key=lambda d: d.date, reverse=True)[:n]
