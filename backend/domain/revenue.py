"""Revenue record entity and the field rules enforced before any write."""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from .errors import ValidationError

MONTHS: Tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
MONTH_INDEX: Dict[str, int] = {name: idx for idx, name in enumerate(MONTHS)}

MIN_YEAR = 2020
MAX_YEAR = 2030

# public sort key -> RevenueRecord attribute
SORT_FIELDS: Dict[str, str] = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "month": "month",
    "year": "year",
    "revenue": "revenue",
    "source": "source",
}
DEFAULT_SORT = "-createdAt"


class RevenueSource(str, Enum):
    MANUAL = "manual"
    PAYMENT = "payment"
    PROJECT = "project"


@dataclass
class RevenueRecord:
    """One persisted revenue entry. Several entries may share a (year, month)."""

    record_id: str
    month: str
    year: int
    revenue: float
    source: RevenueSource = RevenueSource.MANUAL
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def apply_changes(self, changes: Mapping[str, Any], now: datetime) -> None:
        """Overwrite only the supplied (already validated) fields."""
        for name in ("month", "year", "revenue", "source", "description"):
            if name in changes:
                setattr(self, name, changes[name])
        self.updated_at = now

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.record_id,
            "month": self.month,
            "year": self.year,
            "revenue": self.revenue,
            "source": self.source.value,
            "description": self.description,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


# Field rules ----------------------------------------------------------------
def normalize_month(value: Any) -> str:
    """Match a month name case-insensitively and return its canonical form."""
    if isinstance(value, str):
        canonical = value.strip().capitalize()
        if canonical in MONTH_INDEX:
            return canonical
    raise ValidationError(f"Invalid month: {value!r}. Expected a full calendar month name")


def validate_year(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("Year must be an integer")
    if not MIN_YEAR <= value <= MAX_YEAR:
        raise ValidationError(f"Year must be between {MIN_YEAR} and {MAX_YEAR}")
    return value


def validate_revenue(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError("Revenue must be a number")
    if not math.isfinite(value):
        raise ValidationError("Revenue must be a finite number")
    if value < 0:
        raise ValidationError("Revenue cannot be negative")
    return float(value)


def validate_source(value: Any) -> RevenueSource:
    try:
        return RevenueSource(value)
    except ValueError as exc:
        allowed = ", ".join(source.value for source in RevenueSource)
        raise ValidationError(f"Invalid source: {value!r}. Expected one of: {allowed}") from exc


def validate_new_record(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Check a create payload and return the cleaned field values."""
    if any(data.get(name) in (None, "") for name in ("month", "year", "revenue")):
        raise ValidationError("Month, year, and revenue are required")

    source = data.get("source")
    return {
        "month": normalize_month(data["month"]),
        "year": validate_year(data["year"]),
        "revenue": validate_revenue(data["revenue"]),
        "source": validate_source(source) if source is not None else RevenueSource.MANUAL,
        "description": data.get("description"),
    }


def validate_changes(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Check a partial update payload; only keys present in ``data`` are returned."""
    validators = {
        "month": normalize_month,
        "year": validate_year,
        "revenue": validate_revenue,
        "source": validate_source,
    }
    cleaned: Dict[str, Any] = {}
    for name, validator in validators.items():
        if name not in data:
            continue
        if data[name] is None:
            raise ValidationError(f"{name.capitalize()} cannot be empty")
        cleaned[name] = validator(data[name])
    if "description" in data:
        cleaned["description"] = data["description"]
    return cleaned


def parse_sort(sort: Optional[str]) -> Tuple[str, bool]:
    """Turn ``"-createdAt"`` style input into ``("created_at", True)``."""
    raw_sort = (sort or DEFAULT_SORT).strip()
    descending = raw_sort.startswith("-")
    key = raw_sort.lstrip("+-")
    if key not in SORT_FIELDS:
        allowed = ", ".join(SORT_FIELDS)
        raise ValidationError(f"Cannot sort by {key!r}. Allowed fields: {allowed}")
    return SORT_FIELDS[key], descending


def resolve_year(raw: Any, today: Optional[date] = None) -> int:
    """Year query input; missing or non-numeric values fall back to the current year."""
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            pass
    return (today or date.today()).year
