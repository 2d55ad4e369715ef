from __future__ import annotations
import re
from typing import Optional, Tuple

from . import canon
from .exceptions import GridError, require

_LOOSE_LABEL = re.compile(r"^(\d{1,2}):(\d{2})(?::00)?$")


def slot_label(i: int) -> str:
    """Label of slot ``i``: hour = i // 2 + FIRST_HOUR, minute 00 or 30."""
    require(
        0 <= i < canon.SLOT_COUNT,
        f"Slot index {i} outside grid [0, {canon.SLOT_COUNT - 1}]",
        GridError,
    )
    hour = i // 2 + canon.FIRST_HOUR
    minute = "00" if i % 2 == 0 else "30"
    return f"{hour:02d}:{minute}"


TIME_SLOTS: Tuple[str, ...] = tuple(slot_label(i) for i in range(canon.SLOT_COUNT))
_INDEX = {label: i for i, label in enumerate(TIME_SLOTS)}


def slot_index(label: str) -> Optional[int]:
    """Inverse of slot_label. Returns None (not 0) when the label is off-grid."""
    return _INDEX.get(label)


def normalise_label(text: object) -> Optional[str]:
    """
    Map a loosely spelled time header onto its canonical grid label.

    Accepts surrounding whitespace, a single-digit hour ("5:00") and a
    trailing ":00" seconds part ("05:00:00"). Anything else is None.
    """
    if text is None:
        return None
    m = _LOOSE_LABEL.match(str(text).strip())
    if m is None:
        return None
    label = f"{int(m.group(1)):02d}:{m.group(2)}"
    return label if label in _INDEX else None


def end_label(i: int) -> str:
    """Label of the boundary after slot ``i`` (grid end for the last slot)."""
    if i + 1 >= canon.SLOT_COUNT:
        return canon.GRID_END_LABEL
    return slot_label(i + 1)


def window_label(start: int, length: int) -> str:
    """'HH:MM - HH:MM' covering ``length`` slots from ``start``."""
    return f"{slot_label(start)} - {end_label(start + length - 1)}"
