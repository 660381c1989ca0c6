"""
Month grid reconciliation for the booking calendar.

Maps each reservation's [check-in, check-out) interval onto the visible
days of one month, classifies the occupied nights into segments, detects
changeover days and builds the per-day event lists shown for one or
several rooms.
"""
import calendar
from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..utils.models import (
    CalendarDay, CalendarEvent, DayEventKind, HousekeepingTask, Indicator,
    IndicatorKind, MonthGrid, Reservation, ReservationEvent, Segment,
    SegmentKind, TaskEvent, UserRoom
)
from ..utils.logger import get_logger, CalendarLogger
from config.settings import app_config

Span = Tuple[date, date]

ONE_DAY = timedelta(days=1)


def month_days(year: int, month: int) -> List[date]:
    """Ordered days of a month."""
    _, last = calendar.monthrange(year, month)
    return [date(year, month, d) for d in range(1, last + 1)]


def leading_blanks(year: int, month: int) -> int:
    """Empty cells before the first day in a Monday-first week grid."""
    return date(year, month, 1).weekday()


def occupied_span(reservation: Reservation) -> Optional[Span]:
    """
    First and last occupied night of a reservation.

    None when a date is unparseable or the stay has no nights.
    """
    nights = reservation.nights
    if nights is None or nights <= 0:
        return None
    start = reservation.check_in
    if nights == 1:
        return start, start
    return start, reservation.check_out - ONE_DAY


def clip_span(span: Span, first: date, last: date) -> Optional[Span]:
    """Intersect a span with [first, last], None when they do not overlap."""
    start = max(span[0], first)
    end = min(span[1], last)
    if start > end:
        return None
    return start, end


def _segment_kind(day: date, nights: int, span: Span) -> SegmentKind:
    if nights == 1:
        return SegmentKind.SINGLE
    if day == span[0]:
        return SegmentKind.ARRIVAL
    if day == span[1]:
        return SegmentKind.DEPARTURE
    return SegmentKind.MIDDLE


def reservation_segments(
    reservation: Reservation,
    days: Sequence[date],
    calendar_logger: Optional[CalendarLogger] = None,
) -> Dict[date, Segment]:
    """
    Segments of one reservation on the given ordered days.

    Invalid, zero-night and out-of-range reservations give no segments.
    """
    log = calendar_logger or CalendarLogger(get_logger("calendar_grid"))
    if not days:
        return {}

    nights = reservation.nights
    if nights is None:
        log.log_invalid_dates(reservation.id)
        return {}
    if nights <= 0:
        log.log_degenerate_stay(reservation.id, nights)
        return {}

    span = occupied_span(reservation)
    clipped = clip_span(span, days[0], days[-1])
    if clipped is None:
        return {}

    index = {day: i for i, day in enumerate(days)}
    start_idx = index.get(clipped[0])
    end_idx = index.get(clipped[1])
    if start_idx is None or end_idx is None:
        log.log_grid_miss(reservation.id, clipped[0] if start_idx is None else clipped[1])
        return {}

    segments = {}
    for day in days[start_idx:end_idx + 1]:
        segments[day] = Segment(
            reservation_id=reservation.id,
            channel=reservation.channel,
            kind=_segment_kind(day, nights, span),
        )
    return segments


def _room_keys(reservation: Reservation, rooms: Optional[Sequence[UserRoom]]) -> List[str]:
    if rooms is None:
        return [reservation.property_name]
    return [room.room_id for room in rooms if reservation.belongs_to(room)]


def changeover_dates(
    reservations: Iterable[Reservation],
    days: Optional[Sequence[date]] = None,
    rooms: Optional[Iterable[UserRoom]] = None,
) -> Tuple[date, ...]:
    """
    Days where one stay checks out and a different stay checks in, per room.

    With ``rooms``, stays are grouped by the room id they resolve to, so a
    stay referring to a room by name and one referring to it by id share a
    room. Without it, stays are grouped by their raw room reference.
    """
    rooms = list(rooms) if rooms is not None else None
    arrivals: Dict[Tuple[str, date], set] = defaultdict(set)
    departures: Dict[Tuple[str, date], set] = defaultdict(set)
    for res in reservations:
        if not res.is_valid:
            continue
        for room_key in _room_keys(res, rooms):
            arrivals[(room_key, res.check_in)].add(res.id)
            departures[(room_key, res.check_out)].add(res.id)

    visible = set(days) if days is not None else None
    found = set()
    for key, arriving in arrivals.items():
        leaving = departures.get(key)
        if not leaving:
            continue
        if any(a != d for a in arriving for d in leaving):
            day = key[1]
            if visible is None or day in visible:
                found.add(day)
    return tuple(sorted(found))


def _reservation_event_kind(reservation: Reservation, day: date) -> Optional[DayEventKind]:
    check_in, check_out = reservation.check_in, reservation.check_out
    if check_in is None or check_out is None or check_out < check_in:
        return None
    is_check_in = check_in == day
    is_check_out = check_out == day
    if is_check_in and is_check_out:
        return DayEventKind.CHECK_IN_OUT
    if is_check_in:
        return DayEventKind.CHECK_IN
    if is_check_out:
        return DayEventKind.CHECK_OUT
    if check_in < day < check_out:
        return DayEventKind.STAY
    return None


def dedupe_events(events: Iterable[CalendarEvent]) -> List[CalendarEvent]:
    """
    Drop repeats of the same (kind, record id, room name), keeping the first.

    The key is the room name, not the room id: two rooms sharing a display
    name list a stay once.
    """
    unique: Dict[Tuple[str, str, str], CalendarEvent] = {}
    for event in events:
        key = (event.kind.value, event.record_id, event.room_name)
        if key not in unique:
            unique[key] = event
    return list(unique.values())


def sort_events(events: Iterable[CalendarEvent]) -> List[CalendarEvent]:
    """Order: check-in, check-in+out, check-out, task, stay. Stable within a kind."""
    priorities = app_config.event_priorities
    return sorted(events, key=lambda e: priorities.get(e.kind.value, len(priorities) + 1))


def day_events(
    day: date,
    rooms: Iterable[UserRoom],
    reservations: Iterable[Reservation],
    tasks: Iterable[HousekeepingTask] = (),
) -> List[CalendarEvent]:
    """
    Events of one day across rooms, deduplicated and sorted.

    A reservation is attached to a room when its room reference equals the
    room's name or id; a task when its room id equals the room id.
    """
    reservations = list(reservations)
    tasks = list(tasks)
    events: List[CalendarEvent] = []
    for room in rooms:
        for res in reservations:
            if not res.belongs_to(room):
                continue
            kind = _reservation_event_kind(res, day)
            if kind is not None:
                events.append(ReservationEvent(kind, res, room.room_name, room.room_id))
        for task in tasks:
            if task.task_date == day and task.room_id == room.room_id:
                events.append(TaskEvent(task, room.room_name, room.room_id))
    return sort_events(dedupe_events(events))


def day_indicators(events: Sequence[CalendarEvent]) -> List[Indicator]:
    """
    Grid-cell icons for a day's events.

    A check-out and a check-in of different stays in the same room become a
    single changeover icon.
    """
    by_room: Dict[str, List[CalendarEvent]] = defaultdict(list)
    for event in events:
        by_room[event.room_id].append(event)

    indicators: List[Indicator] = []
    for room_id, room_events in by_room.items():
        check_ins = [e for e in room_events if e.kind is DayEventKind.CHECK_IN]
        check_outs = [e for e in room_events if e.kind is DayEventKind.CHECK_OUT]
        paired = set()
        for arriving in check_ins:
            for leaving in check_outs:
                if leaving.record_id != arriving.record_id and leaving.record_id not in paired:
                    paired.update((arriving.record_id, leaving.record_id))
                    indicators.append(Indicator(
                        IndicatorKind.CHANGEOVER, room_id,
                        (leaving.record_id, arriving.record_id),
                    ))
                    break

        for event in room_events:
            if event.kind in (DayEventKind.CHECK_IN, DayEventKind.CHECK_OUT) and event.record_id in paired:
                continue
            indicators.append(Indicator(_indicator_kind(event), room_id, (event.record_id,)))
    return indicators


def _indicator_kind(event: CalendarEvent) -> IndicatorKind:
    kind = event.kind
    if kind is DayEventKind.CHECK_IN:
        return IndicatorKind.ARRIVAL
    if kind is DayEventKind.CHECK_IN_OUT:
        return IndicatorKind.ARRIVAL_DEPARTURE
    if kind is DayEventKind.CHECK_OUT:
        return IndicatorKind.DEPARTURE
    if kind is DayEventKind.TASK:
        return IndicatorKind.TASK
    if kind is DayEventKind.STAY:
        return IndicatorKind.STAY
    raise ValueError(f"Unhandled event kind: {kind}")


def rooms_from_records(
    reservations: Iterable[Reservation], tasks: Iterable[HousekeepingTask] = ()
) -> List[UserRoom]:
    """Stand-in rooms named after the room references found in the records."""
    seen: Dict[str, UserRoom] = {}
    for res in reservations:
        if res.property_name and res.property_name not in seen:
            seen[res.property_name] = UserRoom("", "", res.property_name, res.property_name)
    for task in tasks:
        if task.room_id and task.room_id not in seen:
            seen[task.room_id] = UserRoom("", "", task.room_id, task.room_id)
    return list(seen.values())


def build_month_grid(
    year: int,
    month: int,
    reservations: Iterable[Reservation],
    tasks: Iterable[HousekeepingTask] = (),
    rooms: Optional[Iterable[UserRoom]] = None,
    calendar_logger: Optional[CalendarLogger] = None,
) -> MonthGrid:
    """
    Build the calendar grid of one month.

    Args:
        year: Display year
        month: Display month (1-12)
        reservations: Reservations, already filtered to the displayed rooms
        tasks: Housekeeping tasks
        rooms: Rooms to list events for; derived from the records when omitted
        calendar_logger: Collects skipped-record counts

    Returns:
        Immutable month grid
    """
    log = calendar_logger or CalendarLogger(get_logger("calendar_grid"))
    reservations = list(reservations)
    tasks = list(tasks)
    for task in tasks:
        if task.task_date is None:
            log.log_invalid_dates(task.id, kind="housekeeping_task")
    rooms = list(rooms) if rooms is not None else rooms_from_records(reservations, tasks)
    days = month_days(year, month)

    segments_by_day: Dict[date, List[Segment]] = defaultdict(list)
    for res in reservations:
        for day, segment in reservation_segments(res, days, log).items():
            segments_by_day[day].append(segment)

    changeover_set = set(changeover_dates(reservations, days, rooms))

    calendar_days = []
    for day in days:
        events = day_events(day, rooms, reservations, tasks)
        indicators = day_indicators(events)
        if any(i.kind is IndicatorKind.CHANGEOVER for i in indicators):
            changeover_set.add(day)
        calendar_days.append(CalendarDay(
            date=day,
            segments=tuple(segments_by_day.get(day, ())),
            events=tuple(events),
            indicators=tuple(indicators),
            is_changeover=day in changeover_set,
        ))

    return MonthGrid(
        year=year,
        month=month,
        days=tuple(calendar_days),
        leading_blanks=leading_blanks(year, month),
        changeover_dates=tuple(sorted(changeover_set)),
    )
