from datetime import date
from typing import Any, Dict, Optional

from ...calendar.view import CalendarViewLoader
from ...krossbooking.krossbooking_client import KrossbookingClient
from ...supabase_sync.supabase_client import SupabaseClient
from ...utils.errors import BackendError
from ...utils.logger import get_logger
from ...utils.models import MonthView


class CalendarService:
    """Month and day views of the caller's rooms."""

    def __init__(self, supabase: SupabaseClient, krossbooking: KrossbookingClient, user_id: str):
        self.supabase = supabase
        self.user_id = user_id
        self.loader = CalendarViewLoader(
            rooms_provider=lambda: self.supabase.get_user_rooms(self.user_id),
            krossbooking=krossbooking,
        )
        self.logger = get_logger("calendar_service")

    def get_month(self, year: int, month: int) -> MonthView:
        view = self.loader.load_month(date(year, month, 1))
        self.logger.info(
            "Calendar month served",
            month=view.month.isoformat(),
            rooms=len(view.rooms),
            reservations=len(view.reservations),
            error=view.error,
        )
        return view

    def get_day(self, year: int, month: int, day: int) -> Optional[Dict[str, Any]]:
        """
        One day of the month grid.

        Returns None when the month loaded without rooms. Load errors are
        raised so the route can map them to a status code.
        """
        target = date(year, month, day)
        view = self.get_month(year, month)
        if view.error:
            raise BackendError(view.error)
        if view.grid is None:
            return None
        calendar_day = view.grid.day(target)
        return calendar_day.to_dict() if calendar_day else None
