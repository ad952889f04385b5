"""Abstract repository interface for revenue persistence."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from domain.revenue import RevenueRecord


class RevenueRepository(ABC):
    """Unified gateway so memory store / SQL database share the same API.

    Implementations hand out copies: mutating a returned record never changes
    stored state until it is passed back to ``update``.
    """

    @abstractmethod
    def add(self, record: RevenueRecord) -> None:
        raise NotImplementedError

    @abstractmethod
    def get(self, record_id: str) -> Optional[RevenueRecord]:
        raise NotImplementedError

    @abstractmethod
    def update(self, record: RevenueRecord) -> bool:
        """Overwrite an existing record; returns False when the id is unknown."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, record_id: str) -> bool:
        """Remove a record; returns False when the id is unknown."""
        raise NotImplementedError

    # Queries -------------------------------------------------------------
    @abstractmethod
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
        raise NotImplementedError

    @abstractmethod
    def count(self, *, year: Optional[int] = None, month: Optional[str] = None) -> int:
        raise NotImplementedError

    @abstractmethod
    def list_records(self, year: Optional[int] = None) -> Iterable[RevenueRecord]:
        """All records, optionally restricted to one year, in no particular order."""
        raise NotImplementedError

    # Health --------------------------------------------------------------
    @abstractmethod
    def ping(self) -> None:
        """Raise PersistenceError when the store is unreachable."""
        raise NotImplementedError
