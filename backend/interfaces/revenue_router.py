"""Revenue endpoints: CRUD, chart data, analytics and export."""
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Response
from pydantic import BaseModel, Field

from application.export_service import XLSX_MEDIA_TYPE, build_revenue_workbook, workbook_bytes
from application.revenue_service import RevenueService
from domain.revenue import DEFAULT_SORT, resolve_year
from interfaces import deps
from interfaces.auth import get_current_user, require_admin

router = APIRouter(
    prefix="/api/revenue",
    tags=["revenue"],
    dependencies=[Depends(get_current_user)],
)


class RevenueCreateRequest(BaseModel):
    month: Optional[str] = Field(None, description="Full calendar month name, e.g. January")
    year: Optional[int] = Field(None, description="2020-2030")
    revenue: Optional[float] = Field(None, description="Non-negative amount")
    description: Optional[str] = None
    source: Optional[str] = Field(None, description="manual | payment | project")


class RevenueUpdateRequest(BaseModel):
    """Every field optional; only the ones sent are applied."""

    month: Optional[str] = None
    year: Optional[int] = None
    revenue: Optional[float] = None
    description: Optional[str] = None
    source: Optional[str] = None


@router.get("/chart-data")
def get_chart_data(
    year: Optional[str] = Query(None),
    service: RevenueService = Depends(deps.get_revenue_service),
) -> Dict[str, Any]:
    chart = service.chart_data(resolve_year(year))
    return {
        "success": True,
        "data": {"labels": chart["labels"], "datasets": chart["datasets"]},
        "totalRevenue": chart["totalRevenue"],
        "year": chart["year"],
    }


@router.get("/analytics")
def get_analytics(
    year: Optional[str] = Query(None),
    service: RevenueService = Depends(deps.get_revenue_service),
) -> Dict[str, Any]:
    return {"success": True, "data": service.analytics(resolve_year(year))}


@router.get("/export")
def export_revenue(
    year: Optional[str] = Query(None),
    service: RevenueService = Depends(deps.get_revenue_service),
) -> Response:
    target_year = resolve_year(year)
    workbook = build_revenue_workbook(target_year, service.records_for_year(target_year))
    return Response(
        content=workbook_bytes(workbook),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="revenue_{target_year}.xlsx"'},
    )


@router.get("/")
def list_revenue(
    year: Optional[int] = Query(None),
    month: Optional[str] = Query(None),
    page: int = Query(1),
    limit: Optional[int] = Query(None),
    sort: str = Query(DEFAULT_SORT),
    service: RevenueService = Depends(deps.get_revenue_service),
) -> Dict[str, Any]:
    result = service.list_records(year=year, month=month, page=page, limit=limit, sort=sort)
    return {
        "success": True,
        "data": [record.to_dict() for record in result["records"]],
        "pagination": {
            "total": result["total"],
            "page": result["page"],
            "limit": result["limit"],
            "pages": result["pages"],
        },
    }


@router.post("/", status_code=201)
def create_revenue(
    payload: RevenueCreateRequest,
    service: RevenueService = Depends(deps.get_revenue_service),
) -> Dict[str, Any]:
    record = service.create_record(payload.model_dump(exclude_none=True))
    return {"success": True, "data": record.to_dict()}


@router.post("/seed", dependencies=[Depends(require_admin)])
def seed_revenue(service: RevenueService = Depends(deps.get_revenue_service)) -> Dict[str, Any]:
    inserted = service.seed_sample_data()
    return {"success": True, "inserted": inserted}


@router.put("/{record_id}")
def update_revenue(
    record_id: str,
    payload: RevenueUpdateRequest,
    service: RevenueService = Depends(deps.get_revenue_service),
) -> Dict[str, Any]:
    record = service.update_record(record_id, payload.model_dump(exclude_unset=True))
    return {"success": True, "data": record.to_dict()}


@router.delete("/{record_id}")
def delete_revenue(
    record_id: str,
    service: RevenueService = Depends(deps.get_revenue_service),
) -> Dict[str, Any]:
    service.delete_record(record_id)
    return {"success": True, "message": "Revenue entry deleted successfully"}
