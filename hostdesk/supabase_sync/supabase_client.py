"""
Supabase client helper for sessions, room configuration and profiles.
"""
from typing import Optional, Dict, Any, List

from supabase import create_client

from ..utils.models import UserRoom, UserProfile
from ..utils.errors import AuthenticationError, BackendError, DuplicateRoomError
from ..utils.logger import get_logger
from config.settings import supabase_config, app_config

UNIQUE_VIOLATION = "23505"
NO_ROWS = "PGRST116"

# Columns a user may change on their own profile
PROFILE_FIELDS = (
    "first_name", "last_name", "google_sheet_id", "google_sheet_tab", "objective_amount"
)


def _rows(res) -> List[Dict[str, Any]]:
    """Extract rows from a query response across supabase-py versions."""
    if hasattr(res, "data"):
        return res.data or []
    if hasattr(res, "json") and callable(res.json):
        return res.json().get("data", []) or []
    return []


class SupabaseClient:
    """Supabase client for user-scoped tables and auth sessions."""

    def __init__(self, access_token: Optional[str] = None):
        self.logger = get_logger("supabase_client")
        self.client = None
        self.initialized = False
        self.access_token = access_token

    def initialize(self) -> bool:
        """Initialize Supabase client from environment configuration."""
        try:
            if self.initialized:
                return True

            auth_key = supabase_config.get_auth_key()
            if not supabase_config.url or not auth_key:
                self.logger.error("Supabase configuration missing", url=bool(supabase_config.url))
                return False

            self.client = create_client(supabase_config.url, auth_key)
            if self.access_token:
                self.client.postgrest.auth(self.access_token)
            self.initialized = True
            self.logger.info("Supabase client initialized successfully", url=supabase_config.url)
            return True
        except Exception as e:
            self.logger.error("Failed to initialize Supabase client", error=str(e))
            self.initialized = False
            return False

    def _ensure(self) -> None:
        if not self.initialized and not self.initialize():
            raise BackendError("Supabase initialization failed")

    # Session helpers
    def set_session(self, access_token: str) -> None:
        """Run subsequent table queries as the owner of this token."""
        self.access_token = access_token
        if self.initialized:
            self.client.postgrest.auth(access_token)

    def sign_in(self, email: str, password: str) -> str:
        """Sign in with email and password and keep the session token."""
        self._ensure()
        try:
            res = self.client.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as e:
            self.logger.error("Sign in failed", email=email, error=str(e))
            raise AuthenticationError(f"Could not sign in: {e}") from e
        session = getattr(res, "session", None)
        if session is None or not getattr(session, "access_token", None):
            raise AuthenticationError()
        self.set_session(session.access_token)
        self.logger.info("Signed in", email=email)
        return session.access_token

    def get_access_token(self) -> str:
        """Return the current session's bearer token or raise AuthenticationError."""
        if self.access_token:
            return self.access_token
        if self.initialized:
            try:
                session = self.client.auth.get_session()
            except Exception as e:
                self.logger.error("Error getting Supabase session", error=str(e))
                raise AuthenticationError("Could not retrieve session for authorization.") from e
            token = getattr(session, "access_token", None) if session else None
            if token:
                return token
        self.logger.warning("No active session found, cannot authorize proxy call")
        raise AuthenticationError()

    def get_user(self, access_token: Optional[str] = None) -> Dict[str, Any]:
        """Resolve the user owning a token. Raises AuthenticationError."""
        self._ensure()
        token = access_token or self.get_access_token()
        try:
            res = self.client.auth.get_user(token)
        except Exception as e:
            self.logger.warning("Token rejected by Supabase auth", error=str(e))
            raise AuthenticationError("Unauthorized: User not authenticated.") from e
        user = getattr(res, "user", None)
        if user is None:
            raise AuthenticationError("Unauthorized: User not authenticated.")
        return {"id": str(user.id), "email": getattr(user, "email", None)}

    # Rooms
    def add_user_room(self, user_id: str, room_id: str, room_name: str) -> UserRoom:
        self._ensure()
        try:
            res = (
                self.client.table(app_config.user_rooms_table)
                .insert({"user_id": user_id, "room_id": room_id, "room_name": room_name})
                .execute()
            )
        except Exception as e:
            if getattr(e, "code", None) == UNIQUE_VIOLATION:
                raise DuplicateRoomError(room_id) from e
            self.logger.error("Failed to add room", room_id=room_id, error=str(e))
            raise BackendError(f"Error adding room: {e}") from e

        rows = _rows(res)
        if not rows:
            raise BackendError("Room insert returned no row")
        self.logger.info("Room added", user_id=user_id, room_id=room_id)
        return UserRoom.from_dict(rows[0])

    def get_user_rooms(self, user_id: Optional[str]) -> List[UserRoom]:
        """All rooms configured by a user; empty when there is no user."""
        if not user_id:
            return []
        self._ensure()
        try:
            res = (
                self.client.table(app_config.user_rooms_table)
                .select("*")
                .eq("user_id", user_id)
                .execute()
            )
        except Exception as e:
            self.logger.error("Failed to fetch rooms", user_id=user_id, error=str(e))
            raise BackendError(f"Error fetching rooms: {e}") from e
        return [UserRoom.from_dict(row) for row in _rows(res)]

    def delete_user_room(self, room_entry_id: str) -> bool:
        self._ensure()
        try:
            self.client.table(app_config.user_rooms_table).delete().eq("id", room_entry_id).execute()
        except Exception as e:
            self.logger.error("Failed to delete room", id=room_entry_id, error=str(e))
            raise BackendError(f"Error deleting room: {e}") from e
        self.logger.info("Room deleted", id=room_entry_id)
        return True

    # Profiles
    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        self._ensure()
        try:
            res = (
                self.client.table(app_config.profiles_table)
                .select("*")
                .eq("id", user_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            if getattr(e, "code", None) == NO_ROWS:
                return None
            self.logger.error("Error fetching profile", user_id=user_id, error=str(e))
            raise BackendError(f"Error fetching profile: {e}") from e
        rows = _rows(res)
        return UserProfile.from_dict(rows[0]) if rows else None

    def update_profile(self, user_id: str, updates: Dict[str, Any]) -> UserProfile:
        """Update the user's own profile. id and role are never written."""
        self._ensure()
        payload = {k: v for k, v in updates.items() if k in PROFILE_FIELDS}
        if not payload:
            raise ValueError("No updatable profile fields given")
        try:
            res = (
                self.client.table(app_config.profiles_table)
                .update(payload)
                .eq("id", user_id)
                .execute()
            )
        except Exception as e:
            self.logger.error("Error updating profile", user_id=user_id, error=str(e))
            raise BackendError(f"Error updating profile: {e}") from e
        rows = _rows(res)
        if not rows:
            raise BackendError("Profile not found")
        self.logger.info("Profile updated", user_id=user_id, fields=sorted(payload))
        return UserProfile.from_dict(rows[0])

    def is_admin(self, user_id: str) -> bool:
        profile = self.get_profile(user_id)
        return bool(profile and profile.is_admin)

    # Context manager helpers
    def __enter__(self):
        self.initialize()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        pass
