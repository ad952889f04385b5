"""In-memory data store used by tests and the ``STORAGE=memory`` backend."""
from __future__ import annotations

from dataclasses import replace
from itertools import count
from typing import Dict, Iterable, List, Optional, Tuple

from domain.revenue import RevenueRecord
from .repository import RevenueRepository


class InMemoryRevenueRepository(RevenueRepository):
    def __init__(self):
        self._records: Dict[str, RevenueRecord] = {}
        # insertion sequence, used as the tie-breaker when sorting
        self._order: Dict[str, int] = {}
        self._sequence = count()

    def add(self, record: RevenueRecord) -> None:
        self._records[record.record_id] = replace(record)
        self._order[record.record_id] = next(self._sequence)

    def get(self, record_id: str) -> Optional[RevenueRecord]:
        record = self._records.get(record_id)
        return replace(record) if record else None

    def update(self, record: RevenueRecord) -> bool:
        if record.record_id not in self._records:
            return False
        self._records[record.record_id] = replace(record)
        return True

    def delete(self, record_id: str) -> bool:
        self._order.pop(record_id, None)
        return self._records.pop(record_id, None) is not None

    def find(
        self,
        *,
        year: Optional[int] = None,
        month: Optional[str] = None,
        sort_field: str = "created_at",
        descending: bool = True,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> List[RevenueRecord]:
        matches = self._matching(year, month)

        def _key(record: RevenueRecord) -> Tuple:
            value = getattr(record, sort_field)
            if hasattr(value, "value"):  # enum members sort by their stored string
                value = value.value
            return (value is not None, value, self._order[record.record_id])

        matches.sort(key=_key, reverse=descending)
        end = None if limit is None else offset + limit
        return [replace(record) for record in matches[offset:end]]

    def count(self, *, year: Optional[int] = None, month: Optional[str] = None) -> int:
        return len(self._matching(year, month))

    def list_records(self, year: Optional[int] = None) -> Iterable[RevenueRecord]:
        return [replace(record) for record in self._matching(year, None)]

    def ping(self) -> None:
        return None

    def _matching(self, year: Optional[int], month: Optional[str]) -> List[RevenueRecord]:
        return [
            record
            for record in self._records.values()
            if (year is None or record.year == year) and (month is None or record.month == month)
        ]
