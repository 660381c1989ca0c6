"""
Room configuration endpoints.
"""
from fastapi import APIRouter, Depends, Path
from ..models import RoomResponse, RoomListResponse, CreateRoomRequest, ErrorResponse
from ..dependencies import get_room_service
from ..errors import http_error
from ..services.room_service import RoomService


router = APIRouter(prefix="/rooms", tags=["rooms"])


@router.get(
    "",
    response_model=RoomListResponse,
    summary="List configured rooms",
    responses={
        200: {"description": "Rooms retrieved successfully"},
        500: {"description": "Internal server error", "model": ErrorResponse}
    }
)
def list_rooms(room_service: RoomService = Depends(get_room_service)):
    try:
        rooms = room_service.list_rooms()
    except Exception as e:
        raise http_error(e)

    return {
        "success": True,
        "message": f"Retrieved {len(rooms)} rooms",
        "data": rooms
    }


@router.post(
    "",
    response_model=RoomResponse,
    status_code=201,
    summary="Add a room",
    description="Link a channel-manager room to the current user",
    responses={
        201: {"description": "Room added"},
        409: {"description": "Room already added", "model": ErrorResponse},
    }
)
def add_room(
    room_data: CreateRoomRequest,
    room_service: RoomService = Depends(get_room_service)
):
    """
    Add a room for the current user.

    Args:
        room_data: Room code and display name
        room_service: Injected room service

    Returns:
        The stored room

    Raises:
        HTTPException: 409 when the room is already configured
    """
    try:
        room = room_service.add_room(room_data.room_id, room_data.room_name)
    except Exception as e:
        raise http_error(e)

    return {
        "success": True,
        "message": "Room added successfully",
        "data": room
    }


@router.delete(
    "/{room_entry_id}",
    response_model=RoomResponse,
    summary="Remove a room",
    responses={
        200: {"description": "Room removed"},
        404: {"description": "Room not found", "model": ErrorResponse},
    }
)
def delete_room(
    room_entry_id: str = Path(..., description="Row ID of the room entry"),
    room_service: RoomService = Depends(get_room_service)
):
    try:
        room_service.delete_room(room_entry_id)
    except Exception as e:
        raise http_error(e)

    return {
        "success": True,
        "message": "Room deleted successfully",
        "data": {"id": room_entry_id}
    }
