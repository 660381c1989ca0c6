"""
Unit tests for the calendar view loader.
"""
import pytest
from unittest.mock import Mock
from datetime import date

from hostdesk.calendar.view import CalendarViewLoader, first_of_month, next_month, previous_month
from hostdesk.krossbooking.krossbooking_client import KrossbookingClient
from hostdesk.utils.errors import AuthenticationError, BackendError, ProxyError
from hostdesk.utils.logger import CalendarLogger, get_logger
from hostdesk.utils.models import Channel, HousekeepingTask, MonthView, Reservation, UserRoom

ROOM = UserRoom("1", "user-1", "101", "Studio Vieux Port")


def _reservation(res_id, check_in, check_out, room="Studio Vieux Port"):
    return Reservation(
        id=res_id,
        guest_name=f"Guest {res_id}",
        property_name=room,
        check_in_date=check_in,
        check_out_date=check_out,
        channel=Channel.BOOKING,
    )


@pytest.fixture
def krossbooking():
    client = Mock(spec=KrossbookingClient)
    client.fetch_reservations.return_value = [
        _reservation("A", "2025-04-07", "2025-04-10"),
        _reservation("X", "2025-04-07", "2025-04-10", room="Someone else's flat"),
    ]
    client.fetch_housekeeping_tasks.return_value = [
        HousekeepingTask("t1", "101", "2025-04-10", "cleaning", "pending"),
    ]
    return client


@pytest.fixture
def loader(krossbooking):
    return CalendarViewLoader(
        rooms_provider=lambda: [ROOM],
        krossbooking=krossbooking,
        calendar_logger=CalendarLogger(get_logger("test_calendar_view")),
    )


class TestMonthNavigation:

    def test_next_month_rolls_over_year(self):
        assert next_month(date(2025, 12, 1)) == date(2026, 1, 1)
        assert next_month(date(2025, 4, 1)) == date(2025, 5, 1)

    def test_previous_month_rolls_back_year(self):
        assert previous_month(date(2025, 1, 1)) == date(2024, 12, 1)
        assert previous_month(date(2025, 4, 1)) == date(2025, 3, 1)

    def test_first_of_month(self):
        assert first_of_month(date(2025, 4, 17)) == date(2025, 4, 1)


class TestFetchMonth:

    def test_builds_grid_for_configured_rooms(self, loader, krossbooking):
        view = loader.fetch_month(date(2025, 4, 15))

        assert view.error is None
        assert view.month == date(2025, 4, 1)
        assert view.rooms == (ROOM,)
        assert [r.id for r in view.reservations] == ["A"]
        assert len(view.grid.days) == 30
        krossbooking.fetch_reservations.assert_called_once_with(["101"])
        krossbooking.fetch_housekeeping_tasks.assert_called_once_with(
            date(2025, 4, 1), date(2025, 4, 30), ["101"]
        )

    def test_no_rooms_gives_empty_view(self, krossbooking):
        loader = CalendarViewLoader(lambda: [], krossbooking, CalendarLogger(get_logger("test")))
        view = loader.fetch_month(date(2025, 4, 1))

        assert view == MonthView(month=date(2025, 4, 1))
        krossbooking.fetch_reservations.assert_not_called()

    def test_authentication_error_is_reported(self, loader, krossbooking):
        krossbooking.fetch_reservations.side_effect = AuthenticationError()

        view = loader.fetch_month(date(2025, 4, 1))

        assert view.grid is None
        assert view.error == "Authentication error: User not authenticated. Please log in."

    def test_upstream_error_embeds_message(self, loader, krossbooking):
        krossbooking.fetch_housekeeping_tasks.side_effect = ProxyError(
            "get_housekeeping_tasks", 500, "Krossbooking API unreachable"
        )

        view = loader.fetch_month(date(2025, 4, 1))

        assert view.error.startswith("Error loading data: ")
        assert "Krossbooking API unreachable" in view.error
        assert view.reservations == ()

    def test_backend_error_while_loading_rooms(self, krossbooking):
        def rooms():
            raise BackendError("Error fetching rooms: timeout")

        loader = CalendarViewLoader(rooms, krossbooking, CalendarLogger(get_logger("test")))
        view = loader.fetch_month(date(2025, 4, 1))

        assert view.error == "Error loading data: Error fetching rooms: timeout"


class TestStaleResponses:

    def test_older_ticket_cannot_overwrite_newer_view(self, loader):
        april_ticket = loader.begin(date(2025, 4, 1))
        may_ticket = loader.begin(date(2025, 5, 1))

        may_view = loader.fetch_month(may_ticket.month)
        april_view = loader.fetch_month(april_ticket.month)

        assert loader.commit(may_ticket, may_view) is True
        assert loader.commit(april_ticket, april_view) is False
        assert loader.current is may_view

    def test_stale_response_arriving_first_is_also_dropped(self, loader):
        april_ticket = loader.begin(date(2025, 4, 1))
        may_ticket = loader.begin(date(2025, 5, 1))

        assert loader.commit(april_ticket, loader.fetch_month(april_ticket.month)) is False
        assert loader.current is None
        assert loader.commit(may_ticket, loader.fetch_month(may_ticket.month)) is True
        assert loader.current.month == date(2025, 5, 1)

    def test_load_month_commits(self, loader):
        view = loader.load_month(date(2025, 4, 20))

        assert loader.current is view
        assert view.month == date(2025, 4, 1)

    def test_tickets_increase(self, loader):
        first = loader.begin(date(2025, 4, 1))
        second = loader.begin(date(2025, 4, 1))
        assert second.generation == first.generation + 1
