from collections import Counter
from datetime import date
from typing import Iterable, List, Optional

from ...calendar.grid import clip_span, month_days, occupied_span
from ...krossbooking.krossbooking_client import KrossbookingClient, filter_reservations_for_rooms
from ...supabase_sync.supabase_client import SupabaseClient
from ...utils.logger import get_logger
from ...utils.models import Reservation
from ..models import MonthSummary, YearSummary

CANCELLED_STATUSES = {"cancelled", "canceled", "annulée", "annulee"}


def _active(reservations: Iterable[Reservation]) -> List[Reservation]:
    """Valid, non-cancelled reservations."""
    return [
        res for res in reservations
        if res.is_valid and res.status.strip().lower() not in CANCELLED_STATUSES
    ]


def _nights_within(res: Reservation, first: date, last: date) -> int:
    clipped = clip_span(occupied_span(res), first, last)
    if clipped is None:
        return 0
    return (clipped[1] - clipped[0]).days + 1


def summarize_month(
    year: int, month: int, reservations: Iterable[Reservation], room_count: int
) -> MonthSummary:
    """Totals of one month over the stays that are not cancelled."""
    days = month_days(year, month)
    first, last = days[0], days[-1]
    active = _active(reservations)

    occupied = sum(_nights_within(res, first, last) for res in active)
    available = len(days) * room_count
    arriving = [res for res in active if first <= res.check_in <= last]
    departures = sum(1 for res in active if first <= res.check_out <= last)
    by_channel = Counter(res.channel.style.name for res in arriving)

    return MonthSummary(
        year=year,
        month=month,
        room_count=room_count,
        occupied_nights=occupied,
        available_nights=available,
        occupancy_rate=round(occupied / available * 100, 1) if available else 0.0,
        arrivals=len(arriving),
        departures=departures,
        revenue=round(sum(res.amount_value for res in arriving), 2),
        by_channel=dict(by_channel),
    )


def summarize_year(
    year: int,
    reservations: Iterable[Reservation],
    objective_amount: Optional[float] = None,
    today: Optional[date] = None,
) -> YearSummary:
    """Totals of the stays checking in during a year, with objective progress."""
    today = today or date.today()
    active = _active(reservations)
    in_year = [res for res in active if res.check_in.year == year]
    revenue = round(sum(res.amount_value for res in in_year), 2)

    progress = 0.0
    if objective_amount:
        progress = round(revenue / objective_amount * 100, 1)

    upcoming = sorted(
        (res for res in active if res.check_in >= today),
        key=lambda res: res.check_in,
    )
    return YearSummary(
        year=year,
        reservations=len(in_year),
        nights=sum(res.nights for res in in_year),
        revenue=revenue,
        objective_amount=objective_amount,
        objective_progress=progress,
        next_arrival=upcoming[0].to_dict() if upcoming else None,
    )


class DashboardService:
    """Dashboard figures for one user's rooms, from the channel manager."""

    def __init__(self, supabase: SupabaseClient, krossbooking: KrossbookingClient, user_id: str):
        self.supabase = supabase
        self.krossbooking = krossbooking
        self.user_id = user_id
        self.logger = get_logger("dashboard_service")

    def _reservations(self):
        rooms = self.supabase.get_user_rooms(self.user_id)
        if not rooms:
            return rooms, []
        fetched = self.krossbooking.fetch_reservations([room.room_id for room in rooms])
        return rooms, filter_reservations_for_rooms(fetched, rooms)

    def get_month_summary(self, year: int, month: int) -> MonthSummary:
        try:
            rooms, reservations = self._reservations()
            return summarize_month(year, month, reservations, len(rooms))
        except Exception as e:
            self.logger.error("Error calculating month summary", year=year, month=month, error=str(e))
            raise

    def get_year_summary(self, year: int) -> YearSummary:
        try:
            _, reservations = self._reservations()
            profile = self.supabase.get_profile(self.user_id)
            objective = None
            if profile and profile.objective_amount is not None:
                objective = float(profile.objective_amount)
            return summarize_year(year, reservations, objective)
        except Exception as e:
            self.logger.error("Error calculating year summary", year=year, error=str(e))
            raise

