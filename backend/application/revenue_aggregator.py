"""Revenue aggregation: monthly chart series and summary analytics.

Everything here is recomputed from the raw records on every call. There are
no stored running totals, so concurrent writers to the same (year, month)
bucket never race with each other.
"""
from __future__ import annotations

from collections import defaultdict
from typing import Any, Dict, Iterable, List

from domain.revenue import MONTH_INDEX, MONTHS, RevenueRecord

CHART_DATASET_STYLE: Dict[str, Any] = {
    "label": "Revenue (₹)",
    "backgroundColor": "rgba(102, 126, 234, 0.8)",
    "borderColor": "rgba(102, 126, 234, 1)",
    "borderWidth": 2,
    "borderRadius": 8,
    "borderSkipped": False,
}

YEARS_COMPARED = 3


def monthly_totals(records: Iterable[RevenueRecord]) -> List[float]:
    """Twelve sums in calendar order; months without records stay at 0."""
    totals = [0.0] * len(MONTHS)
    for record in records:
        totals[MONTH_INDEX[record.month]] += record.revenue
    return totals


def build_chart_data(records: Iterable[RevenueRecord]) -> Dict[str, Any]:
    series = monthly_totals(records)
    return {
        "labels": list(MONTHS),
        "datasets": [{**CHART_DATASET_STYLE, "data": series}],
        "totalRevenue": sum(series),
    }


def build_analytics(
    year: int,
    year_records: Iterable[RevenueRecord],
    all_records: Iterable[RevenueRecord],
) -> Dict[str, Any]:
    month_map: Dict[str, Dict[str, Any]] = defaultdict(lambda: {"total": 0.0, "count": 0})
    total = 0.0
    for record in year_records:
        bucket = month_map[record.month]
        bucket["total"] += record.revenue
        bucket["count"] += 1
        total += record.revenue

    breakdown = [
        {"month": month, "total": stats["total"], "count": stats["count"]}
        for month, stats in month_map.items()
    ]
    breakdown.sort(key=lambda item: (-item["total"], MONTH_INDEX[item["month"]]))

    return {
        "currentYear": year,
        "totalRevenue": total,
        "monthlyBreakdown": breakdown,
        "yearlyComparison": yearly_comparison(all_records),
        # divide by months that actually have entries, not by twelve
        "avgMonthlyRevenue": total / len(breakdown) if breakdown else 0,
    }


def yearly_comparison(records: Iterable[RevenueRecord], limit: int = YEARS_COMPARED) -> List[Dict[str, Any]]:
    """Totals for the ``limit`` most recent years present, newest first."""
    year_map: Dict[int, Dict[str, Any]] = defaultdict(lambda: {"total": 0.0, "count": 0})
    for record in records:
        bucket = year_map[record.year]
        bucket["total"] += record.revenue
        bucket["count"] += 1

    return [
        {"year": year, "total": stats["total"], "count": stats["count"]}
        for year, stats in sorted(year_map.items(), reverse=True)[:limit]
    ]
