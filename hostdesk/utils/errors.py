"""
Exception hierarchy for the hostdesk backend.
"""
from typing import Any, Optional


class HostdeskError(Exception):
    """Base error for hostdesk operations."""


class AuthenticationError(HostdeskError):
    """No usable session: missing, expired or rejected credentials."""

    def __init__(self, message: str = "User not authenticated. Please log in."):
        super().__init__(message)


class PermissionDeniedError(HostdeskError):
    """Authenticated user lacks the required role."""

    def __init__(self, message: str = "Forbidden: Admin access required."):
        super().__init__(message)


class ProxyError(HostdeskError):
    """Non-success response from a serverless proxy."""

    def __init__(self, action: str, status_code: int, upstream_error: Optional[Any] = None):
        self.action = action
        self.status_code = status_code
        self.upstream_error = upstream_error
        super().__init__(
            f"Failed to perform {action}: {upstream_error or 'Unknown error'} (HTTP {status_code})"
        )


class DuplicateRoomError(HostdeskError):
    """Room already configured for this user."""

    def __init__(self, room_id: str):
        self.room_id = room_id
        super().__init__(f'Room "{room_id}" is already added.')


class BackendError(HostdeskError):
    """Relational backend call failed."""
