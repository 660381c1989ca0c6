"""
Translation of domain errors into HTTP errors.
"""
from fastapi import HTTPException

from ..utils.errors import (
    AuthenticationError, BackendError, DuplicateRoomError,
    PermissionDeniedError, ProxyError
)
from .services.room_service import RoomNotFoundError


def _detail(message: str, error_code: str, **details) -> dict:
    detail = {"message": message, "error_code": error_code}
    if details:
        detail["details"] = details
    return detail


def http_error(e: Exception) -> HTTPException:
    """HTTPException carrying the error envelope for a domain error."""
    if isinstance(e, AuthenticationError):
        return HTTPException(status_code=401, detail=_detail(str(e), "UNAUTHORIZED"))
    if isinstance(e, PermissionDeniedError):
        return HTTPException(status_code=403, detail=_detail(str(e), "FORBIDDEN"))
    if isinstance(e, DuplicateRoomError):
        return HTTPException(status_code=409, detail=_detail(str(e), "DUPLICATE_ROOM", room_id=e.room_id))
    if isinstance(e, RoomNotFoundError):
        return HTTPException(status_code=404, detail=_detail("Room not found", "NOT_FOUND", id=str(e)))
    if isinstance(e, ProxyError):
        status = 403 if e.status_code == 403 else 502
        return HTTPException(
            status_code=status,
            detail=_detail(str(e), "UPSTREAM_ERROR", action=e.action, status_code=e.status_code),
        )
    if isinstance(e, BackendError):
        return HTTPException(status_code=500, detail=_detail(str(e), "BACKEND_ERROR"))
    if isinstance(e, ValueError):
        return HTTPException(status_code=422, detail=_detail(str(e), "VALIDATION_ERROR"))
    return HTTPException(
        status_code=500,
        detail=_detail("Internal server error", "INTERNAL_ERROR", error=str(e)),
    )
