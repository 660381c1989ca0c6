"""
Spreadsheet endpoints backed by the sheet proxy.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from ..models import SheetResponse, SheetWriteRequest, ErrorResponse
from ..dependencies import RequestContext, get_request_context, get_gsheet_client
from ..errors import http_error
from ...gsheets.gsheet_client import GSheetClient
from ...utils.errors import PermissionDeniedError


router = APIRouter(prefix="/sheets", tags=["sheets"])


@router.get(
    "",
    response_model=SheetResponse,
    summary="Read a sheet range",
    responses={
        200: {"description": "Rows retrieved"},
        502: {"description": "Sheet proxy failed", "model": ErrorResponse},
    }
)
def read_sheet(
    range: Optional[str] = Query(None, description="A1 range, e.g. Sheet1!A1:Z100"),
    gsheet_client: GSheetClient = Depends(get_gsheet_client)
):
    try:
        rows = gsheet_client.read_sheet(range)
    except Exception as e:
        raise http_error(e)

    return {
        "success": True,
        "message": f"Retrieved {len(rows)} rows",
        "data": rows
    }


@router.put(
    "",
    response_model=SheetResponse,
    summary="Write a sheet range",
    description="Admin only",
    responses={
        200: {"description": "Range updated"},
        403: {"description": "Admin access required", "model": ErrorResponse},
    }
)
def write_sheet(
    sheet_data: SheetWriteRequest,
    context: RequestContext = Depends(get_request_context),
    gsheet_client: GSheetClient = Depends(get_gsheet_client)
):
    try:
        if not context.supabase.is_admin(context.user_id):
            raise PermissionDeniedError()
        result = gsheet_client.write_sheet(sheet_data.range, sheet_data.values)
    except Exception as e:
        raise http_error(e)

    return {
        "success": True,
        "message": "Sheet updated successfully",
        "data": result
    }
