"""
Profile endpoints for the current user.
"""
from fastapi import APIRouter, Depends
from ..models import ProfileResponse, ProfileUpdateRequest, ErrorResponse
from ..dependencies import RequestContext, get_request_context
from ..errors import http_error


router = APIRouter(prefix="/profile", tags=["profile"])


@router.get(
    "",
    response_model=ProfileResponse,
    summary="Get the current user's profile",
    responses={
        200: {"description": "Profile retrieved; data is null when no profile row exists"},
        401: {"description": "Not authenticated", "model": ErrorResponse},
    }
)
def get_profile(context: RequestContext = Depends(get_request_context)):
    try:
        profile = context.supabase.get_profile(context.user_id)
    except Exception as e:
        raise http_error(e)

    return {
        "success": True,
        "message": "Profile retrieved" if profile else "No profile found",
        "data": profile.to_dict() if profile else None
    }


@router.patch(
    "",
    response_model=ProfileResponse,
    summary="Update the current user's profile",
    description="Names, spreadsheet settings and yearly objective; id and role cannot be changed",
    responses={
        200: {"description": "Profile updated"},
        422: {"description": "Nothing to update", "model": ErrorResponse},
    }
)
def update_profile(
    updates: ProfileUpdateRequest,
    context: RequestContext = Depends(get_request_context)
):
    try:
        profile = context.supabase.update_profile(
            context.user_id, updates.model_dump(exclude_unset=True)
        )
    except Exception as e:
        raise http_error(e)

    return {
        "success": True,
        "message": "Profile updated successfully",
        "data": profile.to_dict()
    }
