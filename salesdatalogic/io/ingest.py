from __future__ import annotations
import logging
from typing import Optional, Sequence

import pandas as pd

from ..core import canon, timegrid, utils
from ..core.exceptions import IngestError, require
from ..core.types import DailySales, IngestResult
from . import dates

logger = logging.getLogger(__name__)

EMPTY_SHEET_MESSAGE = "Spreadsheet is empty or invalid."
NO_VALID_ROWS_MESSAGE = "No valid data rows found in the file."


def _is_blank(cell: object) -> bool:
    if cell is None:
        return True
    if isinstance(cell, str):
        return not cell.strip()
    try:
        return bool(pd.isna(cell))
    except (TypeError, ValueError):
        return False


def header_slots(header: Sequence[object]) -> list[Optional[int]]:
    """Grid index for each column after the date column (None when off-grid)."""
    out: list[Optional[int]] = []
    for label in list(header)[1:]:
        canonical = timegrid.normalise_label(label)
        out.append(timegrid.slot_index(canonical) if canonical else None)
    return out


def _align(slots: Sequence[Optional[int]], cells: Sequence[object]):
    vector = utils.zero_vector()
    amounts = utils.to_amounts(cells)
    for col, idx in enumerate(slots):
        if idx is None:
            continue
        # short rows read missing cells as 0; duplicated slots keep the last column
        vector[idx] = amounts[col] if col < len(amounts) else 0.0
    return vector


def normalize_row(
    header: Sequence[object],
    row: Sequence[object],
    *,
    slots: Optional[Sequence[Optional[int]]] = None,
) -> Optional[DailySales]:
    """
    Map one spreadsheet row onto the grid.

    ``header[0]`` and ``row[0]`` are the date column; remaining header cells
    are time labels. Returns None for routine skips (blank/unparseable date,
    all-zero sales). ``slots`` lets callers reuse a precomputed header lookup.
    """
    if not row or _is_blank(row[0]):
        logger.debug("Skipping row without a date cell")
        return None

    ts = dates.parse_date(row[0])
    if ts is None:
        logger.debug("Skipping row with unparseable date %r", row[0])
        return None

    if slots is None:
        slots = header_slots(header)
    vector = _align(slots, list(row)[1:])

    total = float(vector.sum())
    if total == 0:
        logger.debug("Skipping all-zero row for %s", dates.to_id(ts))
        return None

    return DailySales.from_sales(ts, vector.tolist())


def normalize_sheet(rows: Sequence[Sequence[object]]) -> IngestResult:
    """
    Normalise a tokenised sheet (header row + data rows) into DailySales.

    Input-level failures come back as ``IngestResult.error``; rows sharing a
    date collapse to the last one so an upload never writes an id twice.
    """
    require(
        not isinstance(rows, (str, bytes)),
        "normalize_sheet expects tokenised rows, not raw text",
        IngestError,
    )
    if len(rows) < 2:
        return IngestResult(error=EMPTY_SHEET_MESSAGE)

    header = [str(h).strip() if h is not None else "" for h in rows[0]]
    slots = header_slots(header)
    matched = sum(1 for s in slots if s is not None)
    if matched < len(slots):
        logger.info(
            "Ignoring %d header column(s) not on the half-hourly grid",
            len(slots) - matched,
        )

    by_id: dict[str, DailySales] = {}
    skipped = 0
    for row in rows[1:]:
        rec = normalize_row(header, row, slots=slots)
        if rec is None:
            skipped += 1
            continue
        by_id[rec.id] = rec

    if not by_id:
        return IngestResult(skipped=skipped, error=NO_VALID_ROWS_MESSAGE)

    logger.info("Normalised %d daily record(s), skipped %d row(s)", len(by_id), skipped)
    return IngestResult(records=list(by_id.values()), skipped=skipped)


def from_dataframe(df: pd.DataFrame) -> IngestResult:
    """
    Normalise a sheet already loaded into pandas.

    The DataFrame's columns are the header (first column = dates) and each
    row is one day.
    """
    if df.empty or len(df.columns) < 2:
        return IngestResult(error=EMPTY_SHEET_MESSAGE)
    header = [str(c) for c in df.columns]
    body = df.astype(object).where(df.notna(), None).values.tolist()
    return normalize_sheet([header, *body])


def normalise_vector(cells: Sequence[object]) -> list[float]:
    """Coerce an already slot-ordered sequence (e.g. today's row) to a grid vector."""
    vector = utils.zero_vector()
    amounts = utils.to_amounts(list(cells)[: canon.SLOT_COUNT])
    vector[: len(amounts)] = amounts
    return vector.tolist()
