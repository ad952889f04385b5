"""Revenue CRUD, listing and aggregation entry points."""
from __future__ import annotations

import logging
import math
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, TYPE_CHECKING
from uuid import uuid4

from application import revenue_aggregator
from application.seed_data import sample_records
from domain.errors import NotFoundError, ValidationError
from domain.revenue import (
    MAX_YEAR,
    MIN_YEAR,
    RevenueRecord,
    normalize_month,
    parse_sort,
    validate_changes,
    validate_new_record,
)

if TYPE_CHECKING:
    from app.config import AppConfig
    from infrastructure.repository import RevenueRepository

logger = logging.getLogger(__name__)

# SQLite binds OFFSET as a signed 64-bit integer
MAX_OFFSET = 2**63 - 1


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _storable_year(year: int) -> bool:
    """Validated records never carry a year outside this range."""
    return MIN_YEAR <= year <= MAX_YEAR


class RevenueService:
    def __init__(
        self,
        config: "AppConfig",
        repository: "RevenueRepository",
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.config = config
        self.repository = repository
        self._clock = clock or _utcnow

    # Listing ---------------------------------------------------------------
    def list_records(
        self,
        *,
        year: Optional[int] = None,
        month: Optional[str] = None,
        page: int = 1,
        limit: Optional[int] = None,
        sort: Optional[str] = None,
    ) -> Dict[str, Any]:
        """One page of records plus the pagination block."""
        limit = self.config.default_page_size if limit is None else limit
        if page < 1:
            raise ValidationError("Page must be 1 or greater")
        if not 1 <= limit <= self.config.max_page_size:
            raise ValidationError(f"Limit must be between 1 and {self.config.max_page_size}")
        offset = (page - 1) * limit
        if offset > MAX_OFFSET:
            raise ValidationError("Page is out of range")
        month = normalize_month(month) if month else None
        sort_field, descending = parse_sort(sort)

        if year is not None and not _storable_year(year):
            records, total = [], 0
        else:
            records = self.repository.find(
                year=year,
                month=month,
                sort_field=sort_field,
                descending=descending,
                offset=offset,
                limit=limit,
            )
            total = self.repository.count(year=year, month=month)
        return {
            "records": records,
            "total": total,
            "page": page,
            "limit": limit,
            "pages": math.ceil(total / limit),
        }

    # Mutations -------------------------------------------------------------
    def create_record(self, payload: Mapping[str, Any]) -> RevenueRecord:
        fields = validate_new_record(payload)
        now = self._clock()
        record = RevenueRecord(record_id=uuid4().hex, created_at=now, updated_at=now, **fields)
        self.repository.add(record)
        logger.info(
            "Revenue entry %s created: %s %s = %s (%s)",
            record.record_id, record.month, record.year, record.revenue, record.source.value,
        )
        return record

    def update_record(self, record_id: str, payload: Mapping[str, Any]) -> RevenueRecord:
        """Partial update: fields missing from ``payload`` keep their value."""
        changes = validate_changes(payload)
        record = self.repository.get(record_id)
        if record is None:
            raise NotFoundError("Revenue entry not found")
        record.apply_changes(changes, self._clock())
        if not self.repository.update(record):
            # deleted between the read and the write
            raise NotFoundError("Revenue entry not found")
        logger.info("Revenue entry %s updated: %s", record_id, sorted(changes))
        return record

    def delete_record(self, record_id: str) -> None:
        if not self.repository.delete(record_id):
            raise NotFoundError("Revenue entry not found")
        logger.info("Revenue entry %s deleted", record_id)

    # Aggregation -------------------------------------------------------------
    def records_for_year(self, year: int) -> List[RevenueRecord]:
        if not _storable_year(year):
            return []
        return list(self.repository.list_records(year))

    def chart_data(self, year: int) -> Dict[str, Any]:
        chart = revenue_aggregator.build_chart_data(self.records_for_year(year))
        logger.debug("Chart data for %s: total=%s", year, chart["totalRevenue"])
        return {**chart, "year": year}

    def analytics(self, year: int) -> Dict[str, Any]:
        analytics = revenue_aggregator.build_analytics(
            year,
            self.records_for_year(year),
            self.repository.list_records(),
        )
        logger.debug("Analytics for %s: total=%s", year, analytics["totalRevenue"])
        return analytics

    # Seeding -------------------------------------------------------------------
    def seed_sample_data(self, current_year: Optional[int] = None) -> int:
        """Insert the sample data set into an empty store; returns rows inserted."""
        if self.repository.count() > 0:
            logger.info("Revenue data already exists, skipping seed")
            return 0
        rows = sample_records(current_year or date.today().year)
        for row in rows:
            self.create_record(row)
        logger.info("Inserted %d sample revenue entries", len(rows))
        return len(rows)
