"""Sample revenue entries inserted into an empty store."""
from __future__ import annotations

from typing import Any, Dict, List

# (month, revenue, source) relative to the current and the previous year
_CURRENT_YEAR = [
    ("January", 65000, "payment"),
    ("February", 59000, "payment"),
    ("March", 80000, "project"),
    ("April", 81000, "payment"),
    ("May", 56000, "manual"),
    ("June", 95000, "project"),
    ("July", 72000, "payment"),
    ("August", 68000, "payment"),
]
_PREVIOUS_YEAR = [
    ("January", 45000, "payment"),
    ("February", 52000, "payment"),
    ("March", 61000, "project"),
    ("April", 58000, "payment"),
    ("May", 67000, "manual"),
    ("June", 73000, "project"),
]


def sample_records(current_year: int) -> List[Dict[str, Any]]:
    rows = [(current_year, entry) for entry in _CURRENT_YEAR]
    rows += [(current_year - 1, entry) for entry in _PREVIOUS_YEAR]
    return [
        {"month": month, "year": year, "revenue": revenue, "source": source}
        for year, (month, revenue, source) in rows
    ]
