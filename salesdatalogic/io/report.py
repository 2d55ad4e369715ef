from __future__ import annotations
import logging
import re
from datetime import datetime
from typing import Optional

from ..core import timegrid, utils
from ..core.types import DailySales, ParsedReport
from . import dates

logger = logging.getLogger(__name__)

NO_SALES_MESSAGE = "No parseable sales data found in the report."

# "Date: 02/03/2024", "Trading 2.3.24", "02-03-2024"
DATE_LINE = re.compile(
    rf"^\s*(?:[A-Za-z][A-Za-z ]*?\s*:?\s*)?({dates.DATE_PATTERN})\s*$"
)

# "05:00 - 05:30 Net Sales £1,234.50"
SALES_LINE = re.compile(
    r"^\s*(\d{1,2}:\d{2})\s*-\s*\d{1,2}:\d{2}(.*?)(\d[\d,]*(?:\.\d+)?)\s*$"
)


def parse_free_text_report(text: str) -> ParsedReport:
    """
    Parse a pasted, line-oriented sales report.

    One line may carry the report date (first match wins and is not read as
    sales). Every other line shaped 'HH:MM - HH:MM <text> <amount>' writes
    its amount into the slot of its start time; later lines overwrite
    earlier ones for the same slot. Missing date and missing sales are
    reported independently.
    """
    report_date: Optional[datetime] = None
    date_seen = False
    vector = utils.zero_vector()
    matched = 0

    for line in (text or "").splitlines():
        if not date_seen:
            m = DATE_LINE.match(line)
            if m is not None:
                date_seen = True
                ts = dates.parse_date(m.group(1))
                if ts is None:
                    logger.debug("Discarding invalid report date %r", m.group(1))
                else:
                    report_date = ts.to_pydatetime()
                continue

        m = SALES_LINE.match(line)
        if m is None:
            continue
        label = timegrid.normalise_label(m.group(1))
        if label is None:
            continue
        idx = timegrid.slot_index(label)
        if idx is None:
            continue
        vector[idx] = utils.to_amount(m.group(3))
        matched += 1

    if float(vector.sum()) == 0:
        logger.debug("Report yielded no sales (%d slot line(s) matched)", matched)
        return ParsedReport(sales=None, date=report_date, error=NO_SALES_MESSAGE)

    return ParsedReport(sales=vector.tolist(), date=report_date)


def report_to_daily_sales(
    report: ParsedReport, fallback_date: Optional[datetime] = None
) -> Optional[DailySales]:
    """Combine a parsed report with the caller's date when the report had none."""
    if report.sales is None:
        return None
    when = report.date or fallback_date
    if when is None:
        return None
    return DailySales.from_sales(when, report.sales)
