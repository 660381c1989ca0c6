"""
Data models for the hostdesk property-management backend.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Dict, Any, Tuple, Union
from enum import Enum


def parse_iso_date(value: Any) -> Optional[date]:
    """Parse an ISO date or datetime string into a date, None when invalid."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


@dataclass(frozen=True)
class ChannelStyle:
    """Display style of a booking channel."""
    name: str
    bg_color: str
    text_color: str = "text-white"


class Channel(Enum):
    """Booking channels reported by the channel manager."""
    AIRBNB = "AIRBNB"
    BOOKING = "BOOKING"
    ABRITEL = "ABRITEL"
    DIRECT = "DIRECT"
    HELLOKEYS = "HELLOKEYS"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_code(cls, code: Optional[str]) -> "Channel":
        if not code:
            return cls.UNKNOWN
        try:
            return cls(str(code).strip().upper())
        except ValueError:
            return cls.UNKNOWN

    @property
    def style(self) -> ChannelStyle:
        if self is Channel.AIRBNB:
            return ChannelStyle("Airbnb", "bg-red-600")
        if self is Channel.BOOKING:
            return ChannelStyle("Booking.com", "bg-blue-700")
        if self is Channel.ABRITEL:
            return ChannelStyle("Abritel", "bg-orange-600")
        if self is Channel.DIRECT:
            return ChannelStyle("Direct", "bg-purple-600")
        if self is Channel.HELLOKEYS:
            return ChannelStyle("Hello Keys", "bg-green-600")
        return ChannelStyle("Autre", "bg-gray-600")


@dataclass(frozen=True)
class Reservation:
    """Booking mirrored from the channel manager."""
    id: str
    guest_name: str
    property_name: str
    check_in_date: str
    check_out_date: str
    status: str = ""
    amount: str = ""
    channel: Channel = Channel.UNKNOWN
    ota_id: Optional[str] = None

    @property
    def check_in(self) -> Optional[date]:
        return parse_iso_date(self.check_in_date)

    @property
    def check_out(self) -> Optional[date]:
        return parse_iso_date(self.check_out_date)

    @property
    def nights(self) -> Optional[int]:
        """Whole nights between check-in and check-out, None if a date is invalid."""
        check_in, check_out = self.check_in, self.check_out
        if check_in is None or check_out is None:
            return None
        return (check_out - check_in).days

    @property
    def is_valid(self) -> bool:
        nights = self.nights
        return nights is not None and nights > 0

    @property
    def amount_value(self) -> float:
        try:
            return float(str(self.amount).replace(",", ".").replace("€", "").strip())
        except ValueError:
            return 0.0

    def belongs_to(self, room: "UserRoom") -> bool:
        return self.property_name in (room.room_name, room.room_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'guest_name': self.guest_name,
            'property_name': self.property_name,
            'check_in_date': self.check_in_date,
            'check_out_date': self.check_out_date,
            'status': self.status,
            'amount': self.amount,
            'channel': self.channel.value,
            'channel_name': self.channel.style.name,
            'ota_id': self.ota_id,
            'nights': self.nights,
        }


@dataclass(frozen=True)
class HousekeepingTask:
    """Housekeeping task attached to a room and a day."""
    id: str
    room_id: str
    date: str
    task_type: str = ""
    status: str = ""
    notes: Optional[str] = None

    @property
    def task_date(self) -> Optional[date]:
        return parse_iso_date(self.date)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'room_id': self.room_id,
            'date': self.date,
            'task_type': self.task_type,
            'status': self.status,
            'notes': self.notes,
        }


@dataclass(frozen=True)
class UserRoom:
    """Room configured by a user: external room code plus display name."""
    id: str
    user_id: str
    room_id: str
    room_name: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserRoom":
        return cls(
            id=str(data.get('id', '')),
            user_id=str(data.get('user_id', '')),
            room_id=str(data.get('room_id', '')),
            room_name=data.get('room_name') or '',
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'user_id': self.user_id,
            'room_id': self.room_id,
            'room_name': self.room_name,
        }


@dataclass
class UserProfile:
    """Row of the profiles table."""
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[str] = None
    google_sheet_id: Optional[str] = None
    google_sheet_tab: Optional[str] = None
    objective_amount: Optional[float] = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserProfile":
        known = {k: data.get(k) for k in (
            'first_name', 'last_name', 'role', 'google_sheet_id',
            'google_sheet_tab', 'objective_amount'
        )}
        return cls(id=str(data.get('id', '')), **known)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'role': self.role,
            'google_sheet_id': self.google_sheet_id,
            'google_sheet_tab': self.google_sheet_tab,
            'objective_amount': self.objective_amount,
        }


@dataclass
class Page:
    """Content page managed through the page-manager proxy."""
    id: str
    slug: str
    title: str
    content: str = ""
    is_published: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    author_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Page":
        return cls(
            id=str(data.get('id', '')),
            slug=data.get('slug', ''),
            title=data.get('title', ''),
            content=data.get('content') or '',
            is_published=bool(data.get('is_published', False)),
            created_at=data.get('created_at'),
            updated_at=data.get('updated_at'),
            author_id=data.get('author_id'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'slug': self.slug,
            'title': self.title,
            'content': self.content,
            'is_published': self.is_published,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
            'author_id': self.author_id,
        }


class SegmentKind(Enum):
    """Position of a day inside a reservation's occupied nights."""
    ARRIVAL = "arrival"
    DEPARTURE = "departure"
    MIDDLE = "middle"
    SINGLE = "single"


@dataclass(frozen=True)
class Segment:
    """One reservation's segment on one calendar day."""
    reservation_id: str
    channel: Channel
    kind: SegmentKind

    def to_dict(self) -> Dict[str, Any]:
        return {
            'reservation_id': self.reservation_id,
            'channel': self.channel.value,
            'kind': self.kind.value,
        }


class DayEventKind(Enum):
    """Kinds of events listed for a day."""
    CHECK_IN = "check_in"
    CHECK_IN_OUT = "check_in_out"
    CHECK_OUT = "check_out"
    TASK = "task"
    STAY = "stay"


class IndicatorKind(Enum):
    """Icons drawn in a grid cell."""
    ARRIVAL = "arrival"
    ARRIVAL_DEPARTURE = "arrival_departure"
    DEPARTURE = "departure"
    CHANGEOVER = "changeover"
    TASK = "task"
    STAY = "stay"


@dataclass(frozen=True)
class Indicator:
    """One icon of a grid cell, for one room."""
    kind: IndicatorKind
    room_id: str
    record_ids: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind.value,
            'room_id': self.room_id,
            'record_ids': list(self.record_ids),
        }


@dataclass(frozen=True)
class ReservationEvent:
    kind: DayEventKind
    reservation: Reservation
    room_name: str
    room_id: str

    @property
    def record_id(self) -> str:
        return self.reservation.id

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind.value,
            'room_name': self.room_name,
            'room_id': self.room_id,
            'reservation': self.reservation.to_dict(),
        }


@dataclass(frozen=True)
class TaskEvent:
    task: HousekeepingTask
    room_name: str
    room_id: str
    kind: DayEventKind = DayEventKind.TASK

    @property
    def record_id(self) -> str:
        return self.task.id

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind.value,
            'room_name': self.room_name,
            'room_id': self.room_id,
            'task': self.task.to_dict(),
        }


CalendarEvent = Union[ReservationEvent, TaskEvent]


@dataclass(frozen=True)
class CalendarDay:
    """A day of the month grid with its segments and events."""
    date: date
    segments: Tuple[Segment, ...] = ()
    events: Tuple[CalendarEvent, ...] = ()
    indicators: Tuple[Indicator, ...] = ()
    is_changeover: bool = False
    in_month: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            'date': self.date.isoformat(),
            'segments': [s.to_dict() for s in self.segments],
            'events': [e.to_dict() for e in self.events],
            'indicators': [i.to_dict() for i in self.indicators],
            'is_changeover': self.is_changeover,
            'in_month': self.in_month,
        }


@dataclass(frozen=True)
class MonthGrid:
    """Computed calendar for one month."""
    year: int
    month: int
    days: Tuple[CalendarDay, ...]
    leading_blanks: int = 0
    changeover_dates: Tuple[date, ...] = ()

    def day(self, day_date: date) -> Optional[CalendarDay]:
        for calendar_day in self.days:
            if calendar_day.date == day_date:
                return calendar_day
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'year': self.year,
            'month': self.month,
            'leading_blanks': self.leading_blanks,
            'changeover_dates': [d.isoformat() for d in self.changeover_dates],
            'days': [d.to_dict() for d in self.days],
        }


@dataclass(frozen=True)
class MonthView:
    """Immutable view model of one calendar month load."""
    month: date
    rooms: Tuple[UserRoom, ...] = ()
    reservations: Tuple[Reservation, ...] = ()
    tasks: Tuple[HousekeepingTask, ...] = ()
    grid: Optional[MonthGrid] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'month': self.month.isoformat(),
            'rooms': [r.to_dict() for r in self.rooms],
            'reservations': [r.to_dict() for r in self.reservations],
            'tasks': [t.to_dict() for t in self.tasks],
            'grid': self.grid.to_dict() if self.grid else None,
            'error': self.error,
        }


@dataclass
class FetchStats:
    """Counters for one calendar load."""
    reservations_fetched: int = 0
    tasks_fetched: int = 0
    malformed_records: int = 0
    invalid_dates: int = 0
    degenerate_stays: int = 0
    grid_misses: int = 0
    by_channel: Dict[str, int] = field(default_factory=dict)

    def reset(self):
        """Reset all statistics."""
        self.reservations_fetched = 0
        self.tasks_fetched = 0
        self.malformed_records = 0
        self.invalid_dates = 0
        self.degenerate_stays = 0
        self.grid_misses = 0
        self.by_channel.clear()

    def add_channel_count(self, channel: str):
        """Add count for a channel."""
        if channel not in self.by_channel:
            self.by_channel[channel] = 0
        self.by_channel[channel] += 1
