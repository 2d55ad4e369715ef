import pandas as pd
import pytest

from salesdatalogic.core import canon
from salesdatalogic.core.types import DailySales


@pytest.fixture
def make_day():
    """Factory: make_day("2024-01-01", {0: 10.0, 5: 2.5}) or make_day(day, [28 values])."""

    def _make(day, slots=None):
        vector = [0.0] * canon.SLOT_COUNT
        if isinstance(slots, dict):
            for i, v in slots.items():
                vector[i] = float(v)
        elif slots is not None:
            vector = [float(v) for v in slots]
        return DailySales.from_sales(pd.Timestamp(day), vector)

    return _make


@pytest.fixture
def three_mondays(make_day):
    # 2024-01-01 is a Monday
    return [
        make_day("2024-01-01", {0: 10.0, 1: 5.0}),
        make_day("2024-01-08", {0: 20.0, 1: 5.0}),
        make_day("2024-01-15", {0: 30.0, 1: 5.0}),
    ]


@pytest.fixture
def flat_fridays(make_day):
    # 2024-02-02/09/16 are Fridays; 10 per slot all day
    return [make_day(d, [10.0] * canon.SLOT_COUNT) for d in ("2024-02-02", "2024-02-09", "2024-02-16")]


@pytest.fixture
def sample_header():
    return ["Date", "05:00", "05:30", "06:00"]


@pytest.fixture
def sample_report():
    return "Date: 02/03/2024\n05:00 - 05:30 Net Sales 100.00\n05:30 - 06:00 Net Sales 50.00"
