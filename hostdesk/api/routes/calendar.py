"""
Booking calendar endpoints.
"""
from fastapi import APIRouter, Depends, HTTPException, Path
from ..models import CalendarMonthResponse, CalendarDayResponse, ErrorResponse
from ..dependencies import get_calendar_service
from ..errors import http_error
from ..services.calendar_service import CalendarService


router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get(
    "/{year}/{month}",
    response_model=CalendarMonthResponse,
    summary="Get a calendar month",
    description="Rooms, reservations, housekeeping tasks and the computed grid of one month",
    responses={
        200: {"description": "Month retrieved; load errors are reported in data.error"},
        401: {"description": "Not authenticated", "model": ErrorResponse},
    }
)
def get_month(
    year: int = Path(..., ge=1970, le=2100, description="Year"),
    month: int = Path(..., ge=1, le=12, description="Month (1-12)"),
    calendar_service: CalendarService = Depends(get_calendar_service)
):
    """
    Load one month for the caller's rooms.

    Upstream failures do not fail the request: the month comes back
    without a grid and with the banner text in ``data.error``.
    """
    try:
        view = calendar_service.get_month(year, month)
    except Exception as e:
        raise http_error(e)

    return {
        "success": view.error is None,
        "message": view.error or f"Loaded {len(view.reservations)} reservations for {view.month.isoformat()[:7]}",
        "data": view.to_dict()
    }


@router.get(
    "/{year}/{month}/days/{day}",
    response_model=CalendarDayResponse,
    summary="Get one calendar day",
    responses={
        200: {"description": "Day retrieved"},
        404: {"description": "Day not in grid", "model": ErrorResponse},
        422: {"description": "Invalid date", "model": ErrorResponse},
    }
)
def get_day(
    year: int = Path(..., ge=1970, le=2100, description="Year"),
    month: int = Path(..., ge=1, le=12, description="Month (1-12)"),
    day: int = Path(..., ge=1, le=31, description="Day of month"),
    calendar_service: CalendarService = Depends(get_calendar_service)
):
    try:
        calendar_day = calendar_service.get_day(year, month, day)
    except Exception as e:
        raise http_error(e)

    if calendar_day is None:
        raise HTTPException(
            status_code=404,
            detail={"message": "No rooms configured", "error_code": "NOT_FOUND"}
        )
    return {
        "success": True,
        "message": f"Retrieved {len(calendar_day['events'])} events",
        "data": calendar_day
    }
