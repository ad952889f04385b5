from datetime import date

import pytest

from domain.errors import ValidationError
from domain.revenue import (
    RevenueSource,
    normalize_month,
    parse_sort,
    resolve_year,
    validate_changes,
    validate_new_record,
    validate_revenue,
    validate_year,
)


def test_month_names_are_matched_case_insensitively():
    assert normalize_month("march") == "March"
    assert normalize_month("  DECEMBER ") == "December"


@pytest.mark.parametrize("value", ["Jan", "Smarch", "", 3, None])
def test_unknown_months_are_rejected(value):
    with pytest.raises(ValidationError):
        normalize_month(value)


def test_year_bounds():
    assert validate_year(2020) == 2020
    assert validate_year(2030) == 2030
    for bad in (2019, 2031, True, "2025"):
        with pytest.raises(ValidationError):
            validate_year(bad)


def test_zero_revenue_is_allowed_but_negative_is_not():
    assert validate_revenue(0) == 0.0
    with pytest.raises(ValidationError, match="cannot be negative"):
        validate_revenue(-1)
    with pytest.raises(ValidationError):
        validate_revenue(float("nan"))


def test_new_record_requires_month_year_and_revenue():
    with pytest.raises(ValidationError, match="required"):
        validate_new_record({"month": "January", "year": 2025})
    with pytest.raises(ValidationError, match="required"):
        validate_new_record({"month": "", "year": 2025, "revenue": 10})


def test_new_record_defaults_source_to_manual():
    cleaned = validate_new_record({"month": "june", "year": 2024, "revenue": 10, "description": "x"})
    assert cleaned == {
        "month": "June",
        "year": 2024,
        "revenue": 10.0,
        "source": RevenueSource.MANUAL,
        "description": "x",
    }


def test_new_record_rejects_unknown_source():
    with pytest.raises(ValidationError, match="source"):
        validate_new_record({"month": "June", "year": 2024, "revenue": 10, "source": "gift"})


def test_changes_only_contain_supplied_fields():
    assert validate_changes({"revenue": 500}) == {"revenue": 500.0}
    assert validate_changes({"description": None}) == {"description": None}
    assert validate_changes({}) == {}


def test_changes_reject_null_for_required_fields():
    with pytest.raises(ValidationError, match="Month cannot be empty"):
        validate_changes({"month": None})


def test_parse_sort():
    assert parse_sort(None) == ("created_at", True)
    assert parse_sort("revenue") == ("revenue", False)
    assert parse_sort("-year") == ("year", True)
    with pytest.raises(ValidationError):
        parse_sort("-password")


def test_resolve_year_falls_back_to_current_year():
    today = date(2027, 5, 1)
    assert resolve_year("2024", today) == 2024
    assert resolve_year(None, today) == 2027
    assert resolve_year("abc", today) == 2027
    assert resolve_year("", today) == 2027
