from __future__ import annotations
import math
import re
from datetime import date as _date, datetime
from numbers import Real
from typing import Optional

import numpy as np
import pandas as pd

from ..core import canon

# day/month/year with '/', '.' or '-' and a 2- or 4-digit year
DATE_PATTERN = r"\d{1,2}[/.\-]\d{1,2}[/.\-](?:\d{4}|\d{2})"

# first date-shaped token anywhere in a cell: 'YYYY-MM-DD' or DATE_PATTERN
_DATE_TOKEN = re.compile(rf"(?<!\d)(\d{{4}}-\d{{1,2}}-\d{{1,2}}|{DATE_PATTERN})(?!\d)")
_SEPARATORS = re.compile(r"[/.\-]")
_EPOCH = pd.Timestamp(canon.SPREADSHEET_EPOCH, tz=canon.TZ)


def _in_range(ts: Optional[pd.Timestamp]) -> Optional[pd.Timestamp]:
    if ts is None or not canon.MIN_YEAR <= ts.year <= canon.MAX_YEAR:
        return None
    return ts


def _utc_midnight(year: int, month: int, day: int) -> Optional[pd.Timestamp]:
    # datetime.date refuses impossible dates instead of rolling them over
    try:
        d = _date(year, month, day)
    except ValueError:
        return None
    if not canon.MIN_YEAR <= d.year <= canon.MAX_YEAR:
        return None
    return pd.Timestamp(d.year, d.month, d.day, tz=canon.TZ)


def from_serial(serial: float) -> Optional[pd.Timestamp]:
    """Spreadsheet day serial (day 0 = SPREADSHEET_EPOCH) to UTC midnight."""
    if not math.isfinite(serial) or serial < 1:
        return None
    try:
        ts = _EPOCH + pd.Timedelta(days=int(math.floor(serial)))
    except (OverflowError, ValueError):
        return None
    return _in_range(ts)


def _from_parts(parts: list[str]) -> Optional[pd.Timestamp]:
    try:
        a, b, c = (int(p) for p in parts)
    except ValueError:
        return None

    # 'YYYY-MM-DD' (canonical ids) re-parse as year-first
    if len(parts[0]) == 4:
        return _utc_midnight(a, b, c)

    year = c + canon.TWO_DIGIT_YEAR_BASE if c < 100 else c
    # DD/MM first, MM/DD only when the first reading is not a real date
    return _utc_midnight(year, b, a) or _utc_midnight(year, a, b)


def parse_date(value: object) -> Optional[pd.Timestamp]:
    """
    Parse a date cell into a tz-aware UTC midnight Timestamp.

    Rules, first match wins:
      1. datetime-like values keep their calendar date (UTC).
      2. Numbers are spreadsheet serials.
      3. Text is searched for its first date token, so labels and trailing
         times ('Date: 02/03/2024', '01/03/2024 00:00') are ignored.
         'D/M/Y' tokens split on '/', '.' or '-': day-first, then
         month-first; 2-digit years land in the 2000s. 'YYYY-MM-DD' reads
         year-first. Impossible dates fail.
      4. Text without a full date token (month names, bare years) fails.

    Results outside MIN_YEAR..MAX_YEAR fail. Returns None for anything
    unparseable; never raises.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (datetime, _date)):
        if pd.isna(value) or not canon.MIN_YEAR <= value.year <= canon.MAX_YEAR:
            return None
        ts = pd.Timestamp(value)
        ts = ts.tz_localize(canon.TZ) if ts.tz is None else ts.tz_convert(canon.TZ)
        return _in_range(ts.normalize())

    if isinstance(value, (Real, np.number)):
        return from_serial(float(value))

    m = _DATE_TOKEN.search(str(value))
    if m is None:
        return None
    return _in_range(_from_parts(_SEPARATORS.split(m.group(1))))


def to_id(ts: pd.Timestamp) -> str:
    return ts.strftime(canon.ID_FORMAT)
