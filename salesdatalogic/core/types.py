from __future__ import annotations
import math
from dataclasses import dataclass
from datetime import datetime
from typing import List, Literal, Optional, Sequence

import pandas as pd
from pydantic import BaseModel, Field, field_validator, model_validator

from . import canon

ProjectionMethod = Literal["weekday_pattern", "run_rate", "none"]


class DailySales(BaseModel):
    """One calendar day of sales aligned to the half-hourly grid.

    Attributes:
        id: Canonical UTC calendar date 'YYYY-MM-DD' (primary key per owner)
        date: Timezone-aware UTC midnight of that calendar date
        day_of_week: English weekday name of ``date``
        sales: 28 non-negative amounts, one per grid slot
        total_sales: Sum of ``sales``
    """

    id: str
    date: datetime
    day_of_week: str = Field(alias="dayOfWeek")
    sales: List[float]
    total_sales: float = Field(alias="totalSales")
    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("date")
    @classmethod
    def _utc_midnight(cls, v: datetime) -> datetime:
        ts = pd.Timestamp(v)
        ts = ts.tz_localize(canon.TZ) if ts.tz is None else ts.tz_convert(canon.TZ)
        return ts.normalize().to_pydatetime()

    @field_validator("sales")
    @classmethod
    def _grid_aligned(cls, v: List[float]) -> List[float]:
        if len(v) != canon.SLOT_COUNT:
            raise ValueError(f"sales must have {canon.SLOT_COUNT} slots, got {len(v)}")
        if any(x < 0 or not math.isfinite(x) for x in v):
            raise ValueError("sales must be finite and non-negative")
        return [float(x) for x in v]

    @model_validator(mode="after")
    def _consistent(self) -> "DailySales":
        expected_id = self.date.strftime(canon.ID_FORMAT)
        if self.id != expected_id:
            raise ValueError(f"id {self.id!r} does not match date {expected_id}")
        if self.day_of_week != canon.WEEKDAYS[self.date.weekday()]:
            raise ValueError(f"day_of_week {self.day_of_week!r} does not match date")
        if not math.isclose(self.total_sales, sum(self.sales), rel_tol=1e-9, abs_tol=1e-9):
            raise ValueError("total_sales must equal the sum of sales")
        return self

    @classmethod
    def from_sales(cls, date: datetime, sales: Sequence[float]) -> "DailySales":
        ts = pd.Timestamp(date)
        ts = ts.tz_localize(canon.TZ) if ts.tz is None else ts.tz_convert(canon.TZ)
        ts = ts.normalize()
        values = [float(x) for x in sales]
        return cls(
            id=ts.strftime(canon.ID_FORMAT),
            date=ts.to_pydatetime(),
            day_of_week=canon.WEEKDAYS[ts.weekday()],
            sales=values,
            total_sales=float(sum(values)),
        )

    @property
    def timestamp(self) -> pd.Timestamp:
        return pd.Timestamp(self.date)


class ComparisonSeries(BaseModel):
    """An overlay series (never persisted)."""

    label: str
    raw: List[float]
    cumulative: List[Optional[float]]
    dashed: bool = False
    source_id: Optional[str] = None  # record id, None for aggregates

    @property
    def total(self) -> float:
        return float(sum(self.raw))


class ComparisonResult(BaseModel):
    series: List[ComparisonSeries] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.series)

    @property
    def primary(self) -> Optional[ComparisonSeries]:
        return self.series[0] if self.series else None


class ProjectionResult(BaseModel):
    total: float
    method: ProjectionMethod
    sum_so_far: float = 0.0
    cutoff: int = -1
    performance_factor: Optional[float] = None
    sample_days: int = 0


class ParsedReport(BaseModel):
    sales: Optional[List[float]] = None
    date: Optional[datetime] = None
    error: Optional[str] = None

    @property
    def has_sales(self) -> bool:
        return self.sales is not None


class IngestResult(BaseModel):
    records: List[DailySales] = Field(default_factory=list)
    skipped: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class PeakWindow:
    start: int
    total: float
    label: str


@dataclass(frozen=True)
class PeakSlot:
    index: int
    value: float
    label: str


@dataclass
class KPI:
    """A single headline number; ``detail`` carries label-like extras (e.g. a time window)."""

    id: str
    label: str
    value: Optional[float]
    detail: Optional[str] = None
