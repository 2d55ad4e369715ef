"""Free-text report parser tests: date line extraction, slot lines, failures reported independently."""

import pandas as pd

import salesdatalogic as sdl
from salesdatalogic.io import report


def test_parse_report_scenario(sample_report):
    out = sdl.parse_free_text_report(sample_report)
    assert out.date == pd.Timestamp("2024-03-02", tz="UTC")
    assert out.sales is not None
    assert out.sales[0] == 100.0
    assert out.sales[1] == 50.0
    assert sum(out.sales) == 150.0
    assert out.error is None


def test_report_without_date_line_still_yields_sales():
    out = report.parse_free_text_report("05:00 - 05:30 Net Sales 12.50\n")
    assert out.date is None
    assert out.sales[0] == 12.5


def test_report_with_date_but_no_sales():
    out = report.parse_free_text_report("Date: 02/03/2024\nNothing to see here\n")
    assert out.date == pd.Timestamp("2024-03-02", tz="UTC")
    assert out.sales is None
    assert out.error == report.NO_SALES_MESSAGE
    assert not out.has_sales


def test_invalid_date_line_is_discarded():
    out = report.parse_free_text_report("Date: 31/02/2024\n06:00 - 06:30 Sales 5")
    assert out.date is None
    assert out.sales[2] == 5.0


def test_bare_date_line_and_first_match_wins():
    text = "01.03.2024\nReport 05/03/2024\n05:00 - 05:30 Sales 1"
    out = report.parse_free_text_report(text)
    assert out.date == pd.Timestamp("2024-03-01", tz="UTC")
    assert out.sales[0] == 1.0


def test_thousands_separators_and_currency_symbols():
    text = "Trading Date: 02/03/2024\n12:00 - 12:30 Gross £1,234.50\n12:30-13:00 Net 2,000"
    out = report.parse_free_text_report(text)
    assert out.sales[14] == 1234.5
    assert out.sales[15] == 2000.0


def test_off_grid_times_are_ignored_and_last_duplicate_wins():
    text = "04:30 - 05:00 Net 99.00\n5:00 - 5:30 Net 1.00\n05:00 - 05:30 Net 3.00\n19:00 - 19:30 Net 7"
    out = report.parse_free_text_report(text)
    assert out.sales[0] == 3.0
    assert sum(out.sales) == 3.0


def test_off_grid_only_report_has_no_sales():
    out = report.parse_free_text_report("04:30 - 05:00 Net 99.00")
    assert out.sales is None
    assert out.error == report.NO_SALES_MESSAGE


def test_empty_text():
    out = report.parse_free_text_report("")
    assert out.sales is None and out.date is None


def test_report_to_daily_sales_prefers_report_date(sample_report):
    parsed = report.parse_free_text_report(sample_report)
    rec = report.report_to_daily_sales(parsed, fallback_date=pd.Timestamp("2024-01-01"))
    assert rec.id == "2024-03-02"
    assert rec.total_sales == 150.0


def test_report_to_daily_sales_uses_fallback_and_handles_missing_sales():
    parsed = report.parse_free_text_report("05:00 - 05:30 Net 4")
    rec = report.report_to_daily_sales(parsed, fallback_date=pd.Timestamp("2024-01-01"))
    assert rec.id == "2024-01-01"
    assert rec.day_of_week == "Monday"
    assert report.report_to_daily_sales(parsed) is None
    empty = report.parse_free_text_report("nothing")
    assert report.report_to_daily_sales(empty, pd.Timestamp("2024-01-01")) is None
