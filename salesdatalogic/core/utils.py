# salesdatalogic/core/utils.py
from __future__ import annotations
from typing import Iterable, Sequence

import numpy as np
import pandas as pd

from . import canon
from .exceptions import GridError, require


def to_amounts(cells: Iterable[object]) -> np.ndarray:
    """
    Coerce raw cells to non-negative floats.

    Degrade-to-zero rule: blanks, non-numeric text, NaN and inf become 0.0;
    thousands separators are stripped from text; negative amounts clip to 0.
    One bad cell never invalidates its neighbours.
    """
    s = pd.Series(list(cells), dtype="object")
    if s.empty:
        return np.zeros(0, dtype=float)
    text = s.map(lambda c: c.replace(",", "").strip() if isinstance(c, str) else c)
    num = pd.to_numeric(text, errors="coerce").astype(float)
    num = num.replace([np.inf, -np.inf], np.nan).fillna(0.0)
    return num.clip(lower=0.0).to_numpy(dtype=float)


def to_amount(cell: object) -> float:
    return float(to_amounts([cell])[0])


def zero_vector() -> np.ndarray:
    return np.zeros(canon.SLOT_COUNT, dtype=float)


def as_grid_vector(sales: Sequence[float]) -> np.ndarray:
    """Return ``sales`` as a float array, requiring exactly one value per grid slot."""
    arr = np.asarray(sales, dtype=float)
    require(
        arr.shape == (canon.SLOT_COUNT,),
        f"Expected {canon.SLOT_COUNT} slot values, got shape {arr.shape}",
        GridError,
    )
    return arr


def last_observed_index(sales: Sequence[float]) -> int:
    """Highest index holding a nonzero value, or -1 when nothing was observed."""
    nz = np.flatnonzero(np.asarray(sales, dtype=float))
    return int(nz[-1]) if len(nz) else -1
