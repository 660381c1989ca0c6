"""
Loads one calendar month into an immutable view model.
"""
from dataclasses import dataclass
from datetime import date
from typing import Callable, List, Optional

from .grid import build_month_grid, month_days
from ..krossbooking.krossbooking_client import KrossbookingClient, filter_reservations_for_rooms
from ..utils.errors import AuthenticationError, BackendError, ProxyError
from ..utils.logger import get_logger, CalendarLogger
from ..utils.models import MonthView, UserRoom


def first_of_month(day: date) -> date:
    return day.replace(day=1)


def next_month(month: date) -> date:
    if month.month == 12:
        return date(month.year + 1, 1, 1)
    return date(month.year, month.month + 1, 1)


def previous_month(month: date) -> date:
    if month.month == 1:
        return date(month.year - 1, 12, 1)
    return date(month.year, month.month - 1, 1)


@dataclass(frozen=True)
class LoadTicket:
    """Identifies one month request; only the newest ticket may commit."""
    generation: int
    month: date


class CalendarViewLoader:
    """
    Builds MonthView objects for the rooms of one user.

    Each month change takes a ticket; a response that arrives after a newer
    ticket was issued is dropped instead of overwriting the newer view.
    """

    def __init__(
        self,
        rooms_provider: Callable[[], List[UserRoom]],
        krossbooking: KrossbookingClient,
        calendar_logger: Optional[CalendarLogger] = None,
    ):
        self.rooms_provider = rooms_provider
        self.krossbooking = krossbooking
        self.logger = get_logger("calendar_view")
        self.calendar_logger = calendar_logger or krossbooking.calendar_logger
        self._generation = 0
        self._current: Optional[MonthView] = None

    @property
    def current(self) -> Optional[MonthView]:
        return self._current

    def begin(self, month: date) -> LoadTicket:
        self._generation += 1
        return LoadTicket(self._generation, first_of_month(month))

    def commit(self, ticket: LoadTicket, view: MonthView) -> bool:
        """Install a view if its ticket is still the newest one."""
        if ticket.generation != self._generation:
            self.logger.info(
                "Dropping stale calendar response",
                month=ticket.month.isoformat(),
                generation=ticket.generation,
                latest=self._generation,
            )
            return False
        self._current = view
        return True

    def fetch_month(self, month: date) -> MonthView:
        """
        Fetch rooms, reservations and tasks for a month and build its grid.

        Errors are reported in ``MonthView.error``; nothing is retried.
        """
        month = first_of_month(month)
        days = month_days(month.year, month.month)
        self.calendar_logger.reset_stats()
        try:
            rooms = list(self.rooms_provider())
            if not rooms:
                return MonthView(month=month)

            room_ids = [room.room_id for room in rooms]
            fetched = self.krossbooking.fetch_reservations(room_ids)
            reservations = filter_reservations_for_rooms(fetched, rooms)
            if len(reservations) != len(fetched):
                self.logger.debug(
                    "Reservations for other rooms dropped",
                    fetched=len(fetched),
                    kept=len(reservations),
                )
            tasks = self.krossbooking.fetch_housekeeping_tasks(days[0], days[-1], room_ids)
        except AuthenticationError as e:
            self.calendar_logger.log_error(e, "calendar load")
            return MonthView(month=month, error=f"Authentication error: {e}")
        except (ProxyError, BackendError) as e:
            self.calendar_logger.log_error(e, "calendar load")
            return MonthView(month=month, error=f"Error loading data: {e}")

        grid = build_month_grid(
            month.year, month.month, reservations, tasks, rooms, self.calendar_logger
        )
        return MonthView(
            month=month,
            rooms=tuple(rooms),
            reservations=tuple(reservations),
            tasks=tuple(tasks),
            grid=grid,
        )

    def load_month(self, month: date) -> MonthView:
        """Fetch a month and commit it; returns the view that is current afterwards."""
        ticket = self.begin(month)
        view = self.fetch_month(ticket.month)
        self.commit(ticket, view)
        return self._current if self._current is not None else view
