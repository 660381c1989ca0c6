"""
Utility modules for the hostdesk backend.
"""

from .models import (
    Channel, ChannelStyle, Reservation, HousekeepingTask, UserRoom,
    UserProfile, Page, SegmentKind, Segment, DayEventKind, ReservationEvent,
    TaskEvent, IndicatorKind, Indicator, CalendarDay, MonthGrid, MonthView,
    FetchStats, parse_iso_date
)
from .logger import setup_logger, get_logger, CalendarLogger
from .errors import (
    HostdeskError, AuthenticationError, PermissionDeniedError, ProxyError,
    DuplicateRoomError, BackendError
)

__all__ = [
    'Channel', 'ChannelStyle', 'Reservation', 'HousekeepingTask', 'UserRoom',
    'UserProfile', 'Page', 'SegmentKind', 'Segment', 'DayEventKind',
    'ReservationEvent', 'TaskEvent', 'IndicatorKind', 'Indicator',
    'CalendarDay', 'MonthGrid', 'MonthView',
    'FetchStats', 'parse_iso_date', 'setup_logger', 'get_logger',
    'CalendarLogger', 'HostdeskError', 'AuthenticationError',
    'PermissionDeniedError', 'ProxyError', 'DuplicateRoomError', 'BackendError'
]
