"""
Booking calendar: month grid reconciliation and view loading.
"""

from .grid import (
    month_days, leading_blanks, occupied_span, clip_span,
    reservation_segments, changeover_dates, day_events, day_indicators,
    dedupe_events, sort_events, build_month_grid
)
from .view import CalendarViewLoader, LoadTicket, next_month, previous_month

__all__ = [
    'month_days', 'leading_blanks', 'occupied_span', 'clip_span',
    'reservation_segments', 'changeover_dates', 'day_events',
    'day_indicators', 'dedupe_events', 'sort_events', 'build_month_grid',
    'CalendarViewLoader', 'LoadTicket', 'next_month', 'previous_month'
]
