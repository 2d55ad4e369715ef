from __future__ import annotations
from typing import Any, Iterable, Mapping, Sequence

import pandas as pd

from ..core import canon, timegrid
from ..core.types import DailySales

SalesRecord = dict[str, Any]


def to_record(day: DailySales) -> SalesRecord:
    """
    Serialise a DailySales into the persisted document shape:

        {"id", "date" (ISO 8601), "dayOfWeek", "sales", "totalSales"}
    """
    return day.model_dump(mode="json", by_alias=True)


def from_record(obj: Mapping[str, Any]) -> DailySales:
    """Rebuild a DailySales from a persisted document; invariants are re-validated."""
    return DailySales.model_validate(dict(obj))


def to_records(history: Iterable[DailySales]) -> list[SalesRecord]:
    return [to_record(d) for d in history]


def from_records(objs: Iterable[Mapping[str, Any]]) -> list[DailySales]:
    return [from_record(o) for o in objs]


def empty_frame() -> pd.DataFrame:
    idx = pd.DatetimeIndex([], tz=canon.TZ, name=canon.FRAME_INDEX_NAME)
    return pd.DataFrame(columns=[*canon.FRAME_META_COLS, *timegrid.TIME_SLOTS], index=idx)


def to_frame(history: Sequence[DailySales]) -> pd.DataFrame:
    """
    Tabular view of a historical collection.

    - index: tz-aware UTC 'date' (store order is preserved, not sorted)
    - columns: id, day_of_week, total_sales, then one float column per slot label
    """
    if not history:
        return empty_frame()

    meta = pd.DataFrame(
        {
            canon.FRAME_INDEX_NAME: [d.timestamp for d in history],
            "id": [d.id for d in history],
            "day_of_week": [d.day_of_week for d in history],
            "total_sales": [d.total_sales for d in history],
        }
    )
    slots = pd.DataFrame([d.sales for d in history], columns=list(timegrid.TIME_SLOTS))
    out = pd.concat([meta, slots], axis=1).set_index(canon.FRAME_INDEX_NAME)
    out.index = pd.DatetimeIndex(out.index).tz_convert(canon.TZ)
    return out


def frame_rows(frame: pd.DataFrame) -> list[list[float]]:
    """Slot vectors of each frame row, in frame order."""
    return frame[list(timegrid.TIME_SLOTS)].astype(float).values.tolist()
