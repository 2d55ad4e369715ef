from .core import canon, exceptions, timegrid, types, utils
from .io import dates, formats, ingest, report, store
from .analytics import (
    series,
    projection,
    comparison,
    profiles,
    summary,
    insights,
    dashboard,
)

from .io.ingest import normalize_row, normalize_sheet
from .io.report import parse_free_text_report
from .analytics.comparison import ComparisonMode, ComparisonParams, DateRange, build_comparison
from .analytics.projection import project_day_sales
from .analytics.summary import summarize_kpis

__all__ = [
    "canon",
    "exceptions",
    "timegrid",
    "types",
    "utils",
    "dates",
    "formats",
    "ingest",
    "report",
    "store",
    "series",
    "projection",
    "comparison",
    "profiles",
    "summary",
    "insights",
    "dashboard",
    "normalize_row",
    "normalize_sheet",
    "parse_free_text_report",
    "ComparisonMode",
    "ComparisonParams",
    "DateRange",
    "build_comparison",
    "project_day_sales",
    "summarize_kpis",
]
