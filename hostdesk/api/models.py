"""
Immutable data models for API responses and requests.
"""
from typing import Optional, Dict, Any, List
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict, field_serializer, field_validator


class APIResponse(BaseModel):
    """Base API response model."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    success: bool = Field(..., description="Whether the request was successful")
    message: str = Field(..., description="Response message")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Response timestamp")

    @field_serializer('timestamp')
    def serialize_timestamp(self, timestamp: datetime) -> str:
        return timestamp.isoformat()


class ErrorResponse(APIResponse):
    """Error response model."""
    error_code: Optional[str] = Field(None, description="Error code for debugging")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")


class HealthResponse(BaseModel):
    """Health check response model."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    status: str = Field(..., description="Service status")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Health check timestamp")
    version: str = Field(..., description="API version")
    dependencies: Dict[str, str] = Field(default_factory=dict, description="Dependency statuses")

    @field_serializer('timestamp')
    def serialize_timestamp(self, timestamp: datetime) -> str:
        return timestamp.isoformat()


class CalendarMonthResponse(APIResponse):
    """Month view: rooms, reservations, tasks and the computed grid."""
    data: Dict[str, Any] = Field(..., description="Month view model")


class CalendarDayResponse(APIResponse):
    """Events and indicators of one day."""
    data: Dict[str, Any] = Field(..., description="Calendar day")


class CreateRoomRequest(BaseModel):
    """Request model for configuring a room."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    room_id: str = Field(..., min_length=1, description="Channel-manager room ID")
    room_name: str = Field(..., min_length=1, description="Display name of the room")

    @field_validator('room_id', 'room_name')
    @classmethod
    def strip_value(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class RoomResponse(APIResponse):
    data: Dict[str, Any] = Field(..., description="Room data")


class RoomListResponse(APIResponse):
    data: List[Dict[str, Any]] = Field(..., description="Rooms configured by the user")


class ProfileUpdateRequest(BaseModel):
    """Partial profile update; id and role are not accepted."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    first_name: Optional[str] = Field(None, description="First name")
    last_name: Optional[str] = Field(None, description="Last name")
    google_sheet_id: Optional[str] = Field(None, description="Spreadsheet ID")
    google_sheet_tab: Optional[str] = Field(None, description="Spreadsheet tab")
    objective_amount: Optional[float] = Field(None, ge=0, description="Yearly revenue objective in euros")


class ProfileResponse(APIResponse):
    data: Optional[Dict[str, Any]] = Field(None, description="Profile data")


class SheetWriteRequest(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    range: str = Field("Sheet1!A1", description="Target range, e.g. Sheet1!A1")
    values: List[List[Any]] = Field(..., description="Rows of cell values")


class SheetResponse(APIResponse):
    data: Any = Field(None, description="Rows read or update result")


class CreatePageRequest(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    slug: str = Field(..., min_length=1, description="URL slug")
    title: str = Field(..., min_length=1, description="Page title")
    content: str = Field("", description="Page content")
    is_published: bool = Field(False, description="Whether the page is published")


class UpdatePageRequest(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    slug: Optional[str] = Field(None, description="URL slug")
    title: Optional[str] = Field(None, description="Page title")
    content: Optional[str] = Field(None, description="Page content")
    is_published: Optional[bool] = Field(None, description="Whether the page is published")


class PageResponse(APIResponse):
    data: Optional[Dict[str, Any]] = Field(None, description="Page data")


class PageListResponse(APIResponse):
    data: List[Dict[str, Any]] = Field(..., description="Pages")


class MonthSummary(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    year: int
    month: int
    room_count: int = Field(..., ge=0)
    occupied_nights: int = Field(..., ge=0)
    available_nights: int = Field(..., ge=0)
    occupancy_rate: float = Field(..., description="Occupied nights over available nights, percent")
    arrivals: int = Field(..., ge=0)
    departures: int = Field(..., ge=0)
    revenue: float = Field(..., description="Amount of stays checking in this month")
    by_channel: Dict[str, int] = Field(default_factory=dict, description="Arrivals by channel")


class YearSummary(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    year: int
    reservations: int = Field(..., ge=0)
    nights: int = Field(..., ge=0)
    revenue: float
    objective_amount: Optional[float] = None
    objective_progress: float = Field(..., description="Revenue over objective, percent")
    next_arrival: Optional[Dict[str, Any]] = None


class MonthSummaryResponse(APIResponse):
    data: MonthSummary


class YearSummaryResponse(APIResponse):
    data: YearSummary
