"""
Dashboard summary endpoints.
"""
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from ..models import MonthSummaryResponse, YearSummaryResponse, ErrorResponse
from ..dependencies import get_dashboard_service
from ..errors import http_error
from ..services.dashboard_service import DashboardService


router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get(
    "/month",
    response_model=MonthSummaryResponse,
    summary="Monthly occupancy and revenue",
    description="Defaults to the current month",
    responses={
        200: {"description": "Summary computed"},
        502: {"description": "Reservation proxy failed", "model": ErrorResponse},
    }
)
def month_summary(
    year: Optional[int] = Query(None, ge=1970, le=2100, description="Year"),
    month: Optional[int] = Query(None, ge=1, le=12, description="Month (1-12)"),
    dashboard_service: DashboardService = Depends(get_dashboard_service)
):
    today = date.today()
    year = year or today.year
    month = month or today.month
    try:
        summary = dashboard_service.get_month_summary(year, month)
    except Exception as e:
        raise http_error(e)

    return {
        "success": True,
        "message": f"Summary for {year}-{month:02d}",
        "data": summary
    }


@router.get(
    "/year",
    response_model=YearSummaryResponse,
    summary="Yearly revenue and objective progress",
    responses={
        200: {"description": "Summary computed"},
        502: {"description": "Reservation proxy failed", "model": ErrorResponse},
    }
)
def year_summary(
    year: Optional[int] = Query(None, ge=1970, le=2100, description="Year"),
    dashboard_service: DashboardService = Depends(get_dashboard_service)
):
    year = year or date.today().year
    try:
        summary = dashboard_service.get_year_summary(year)
    except Exception as e:
        raise http_error(e)

    return {
        "success": True,
        "message": f"Summary for {year}",
        "data": summary
    }
