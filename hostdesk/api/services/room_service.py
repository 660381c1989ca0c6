from typing import Any, Dict, List

from ...supabase_sync.supabase_client import SupabaseClient
from ...utils.logger import get_logger


class RoomNotFoundError(LookupError):
    """Room entry missing or owned by another user."""


class RoomService:
    """User-room management scoped to the signed-in user."""

    def __init__(self, supabase: SupabaseClient, user_id: str):
        self.supabase = supabase
        self.user_id = user_id
        self.logger = get_logger("room_service")

    def list_rooms(self) -> List[Dict[str, Any]]:
        return [room.to_dict() for room in self.supabase.get_user_rooms(self.user_id)]

    def add_room(self, room_id: str, room_name: str) -> Dict[str, Any]:
        room = self.supabase.add_user_room(self.user_id, room_id, room_name)
        return room.to_dict()

    def delete_room(self, room_entry_id: str) -> bool:
        """Delete one of the caller's rooms by its row id."""
        owned = {room.id for room in self.supabase.get_user_rooms(self.user_id)}
        if room_entry_id not in owned:
            self.logger.warning("Room not found for user", id=room_entry_id, user_id=self.user_id)
            raise RoomNotFoundError(room_entry_id)
        return self.supabase.delete_user_room(room_entry_id)
