from __future__ import annotations
import logging
import threading
from typing import Dict, Iterable, List, Protocol

from ..core.exceptions import StoreError, require
from ..core.types import DailySales

logger = logging.getLogger(__name__)


class HistoricalStore(Protocol):
    """Per-owner DailySales persistence.

    Implementations must commit one batch atomically and let a later record
    with the same id replace the earlier one wholesale (no field merge).
    Owner ids are opaque and trusted.
    """

    def get_all(self, owner: str) -> List[DailySales]: ...

    def upsert_batch(self, owner: str, records: Iterable[DailySales]) -> int: ...


def merge_history(
    existing: Iterable[DailySales], incoming: Iterable[DailySales]
) -> List[DailySales]:
    """Replace-by-id merge: incoming records supersede existing ones with the same id."""
    merged: Dict[str, DailySales] = {d.id: d for d in existing}
    for d in incoming:
        merged[d.id] = d
    return list(merged.values())


class InMemoryStore:
    """Thread-safe in-process HistoricalStore."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._data: Dict[str, Dict[str, DailySales]] = {}

    def get_all(self, owner: str) -> List[DailySales]:
        require(bool(owner), "Owner id must be a non-empty string.", StoreError)
        with self._lock:
            return list(self._data.get(owner, {}).values())

    def upsert_batch(self, owner: str, records: Iterable[DailySales]) -> int:
        require(bool(owner), "Owner id must be a non-empty string.", StoreError)
        batch = list(records)
        for rec in batch:
            require(
                isinstance(rec, DailySales),
                f"Cannot store {type(rec).__name__}; expected DailySales.",
                StoreError,
            )
        with self._lock:
            # build the replacement mapping fully, then swap it in
            current = dict(self._data.get(owner, {}))
            for rec in batch:
                current[rec.id] = rec
            self._data[owner] = current
        logger.info("Stored %d record(s) for owner %s", len(batch), owner)
        return len(batch)
