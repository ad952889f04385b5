import pytest

from domain.errors import NotFoundError, ValidationError
from domain.revenue import RevenueSource


def test_create_persists_record(service, repository):
    record = service.create_record(
        {"month": "april", "year": 2025, "revenue": 1200, "source": "project", "description": "Kickoff"}
    )

    stored = repository.get(record.record_id)
    assert stored is not None
    assert stored.month == "April"
    assert stored.source is RevenueSource.PROJECT
    assert stored.created_at == stored.updated_at


def test_negative_revenue_is_rejected_and_nothing_is_stored(service, repository):
    with pytest.raises(ValidationError):
        service.create_record({"month": "January", "year": 2025, "revenue": -1})
    assert repository.count() == 0


def test_partial_update_keeps_other_fields(service):
    record = service.create_record({"month": "March", "year": 2024, "revenue": 10, "description": "Retainer"})

    updated = service.update_record(record.record_id, {"revenue": 500})

    assert updated.revenue == 500
    assert (updated.month, updated.year, updated.description) == ("March", 2024, "Retainer")
    assert updated.updated_at > record.updated_at
    assert updated.created_at == record.created_at


def test_update_revalidates_supplied_revenue(service, repository):
    record = service.create_record({"month": "March", "year": 2024, "revenue": 10})
    with pytest.raises(ValidationError):
        service.update_record(record.record_id, {"revenue": -3})
    assert repository.get(record.record_id).revenue == 10


def test_update_unknown_id(service):
    with pytest.raises(NotFoundError):
        service.update_record("missing", {"revenue": 1})


def test_delete_unknown_id_leaves_collection_unchanged(service, repository, example_records):
    with pytest.raises(NotFoundError):
        service.delete_record("missing")
    assert repository.count() == len(example_records)


def test_delete_removes_record(service, repository, example_records):
    service.delete_record(example_records[0].record_id)
    assert repository.get(example_records[0].record_id) is None
    assert repository.count() == 2


def test_list_defaults_to_most_recent_first(service, example_records):
    result = service.list_records()
    assert [r.record_id for r in result["records"]] == [r.record_id for r in reversed(example_records)]
    assert (result["total"], result["page"], result["limit"], result["pages"]) == (3, 1, 10, 1)


def test_list_paginates_and_counts_pages(service, example_records):
    result = service.list_records(page=2, limit=2, sort="revenue")
    assert [r.revenue for r in result["records"]] == [200]
    assert result["total"] == 3
    assert result["pages"] == 2


def test_list_filters_by_year_and_month(service, example_records):
    service.create_record({"month": "January", "year": 2024, "revenue": 999})

    result = service.list_records(year=2025, month="january")
    assert result["total"] == 2
    assert {r.revenue for r in result["records"]} == {100, 50}


def test_list_rejects_bad_paging_and_sort(service):
    with pytest.raises(ValidationError):
        service.list_records(page=0)
    with pytest.raises(ValidationError):
        service.list_records(limit=1000)
    with pytest.raises(ValidationError):
        service.list_records(sort="-id")


def test_empty_listing_has_zero_pages(service):
    result = service.list_records()
    assert result["records"] == []
    assert result["pages"] == 0


def test_chart_and_analytics_for_example(service, example_records):
    chart = service.chart_data(2025)
    assert chart["datasets"][0]["data"] == [150, 200] + [0] * 10
    assert chart["totalRevenue"] == 350
    assert chart["year"] == 2025

    analytics = service.analytics(2025)
    assert analytics["avgMonthlyRevenue"] == 175
    assert analytics["yearlyComparison"] == [{"year": 2025, "total": 350, "count": 3}]


def test_chart_for_year_without_records(service, example_records):
    chart = service.chart_data(2021)
    assert chart["datasets"][0]["data"] == [0] * 12
    assert chart["totalRevenue"] == 0


def test_seed_only_fills_an_empty_store(service, repository):
    assert service.seed_sample_data(current_year=2025) == 14
    assert repository.count(year=2025) == 8
    assert repository.count(year=2024) == 6
    assert service.seed_sample_data(current_year=2025) == 0
    assert repository.count() == 14


def test_memory_update_refuses_unknown_record(service, repository):
    record = service.create_record({"month": "April", "year": 2025, "revenue": 10})
    repository.delete(record.record_id)
    record.revenue = 99

    assert repository.update(record) is False
    assert repository.count() == 0


def test_out_of_range_year_reads_as_empty(service, example_records):
    assert service.chart_data(10**20)["totalRevenue"] == 0
    assert service.analytics(1999)["monthlyBreakdown"] == []
    listing = service.list_records(year=10**20)
    assert (listing["records"], listing["total"], listing["pages"]) == ([], 0, 0)


def test_page_offset_must_fit_in_64_bits(service):
    with pytest.raises(ValidationError, match="out of range"):
        service.list_records(page=10**19)
