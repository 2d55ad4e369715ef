from __future__ import annotations
from typing import Final, Tuple

# Half-hourly trading grid: 28 slots starting 05:00, last slot 18:30-19:00
SLOT_COUNT: Final[int] = 28
FIRST_HOUR: Final[int] = 5
SLOT_MINUTES: Final[int] = 30
GRID_END_LABEL: Final[str] = "19:00"
MIDDAY_LABEL: Final[str] = "12:00"

# Peak window = 4 slots (2 hours)
PEAK_WINDOW_SLOTS: Final[int] = 4

TZ: Final[str] = "UTC"
ID_FORMAT: Final[str] = "%Y-%m-%d"
DISPLAY_DATE_FORMAT: Final[str] = "%d/%m/%Y"

WEEKDAYS: Final[Tuple[str, ...]] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

# Spreadsheet serial day 0 (1900 date system as exposed by modern readers)
SPREADSHEET_EPOCH: Final[str] = "1899-12-30"
MIN_YEAR: Final[int] = 1900
MAX_YEAR: Final[int] = 9999
TWO_DIGIT_YEAR_BASE: Final[int] = 2000

# Comparison limits
WEEKDAY_RECORD_LIMIT: Final[int] = 5
OVERALL_RECORD_LIMIT: Final[int] = 10
SPECIFIC_DATES_LIMIT: Final[int] = 10
RECENT_CANDIDATES: Final[int] = 100

# Weekday-pattern projection needs at least this many same-weekday days
MIN_PATTERN_DAYS: Final[int] = 3

# Frame columns (one column per slot label is added alongside these)
FRAME_INDEX_NAME: Final[str] = "date"
FRAME_META_COLS: Final[list[str]] = ["id", "day_of_week", "total_sales"]
