"""
Command-line calendar for the rooms of one host.
"""
import os
from datetime import date, datetime
from typing import List, Optional, Sequence

import click
import httpx

from .calendar.view import CalendarViewLoader
from .krossbooking.krossbooking_client import KrossbookingClient
from .proxy.proxy_client import ProxyClient
from .supabase_sync.supabase_client import SupabaseClient
from .utils.errors import AuthenticationError, BackendError
from .utils.models import MonthView, ReservationEvent, UserRoom
from .utils.logger import setup_logger, CalendarLogger
from config.settings import app_config, proxy_config


def parse_room_specs(specs: Sequence[str]) -> List[UserRoom]:
    """Rooms from ``id`` or ``id:name`` strings; the name defaults to the id."""
    rooms = []
    for spec in specs:
        spec = spec.strip()
        if not spec:
            continue
        room_id, _, room_name = spec.partition(":")
        room_id = room_id.strip()
        rooms.append(UserRoom("", "", room_id, room_name.strip() or room_id))
    return rooms


def parse_month(value: Optional[str]) -> date:
    """First day of a ``YYYY-MM`` month, the current month when omitted."""
    if not value:
        return date.today().replace(day=1)
    return datetime.strptime(value, "%Y-%m").date()


class BookingCalendar:
    """Loads and prints calendar months for a signed-in host."""

    def __init__(
        self,
        log_level: str = "INFO",
        log_file: Optional[str] = None,
        supabase: Optional[SupabaseClient] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        self.logger = setup_logger("hostdesk", log_level, log_file)
        self.calendar_logger = CalendarLogger(self.logger)
        self.supabase = supabase or SupabaseClient()
        self.proxy = ProxyClient(
            proxy_config.krossbooking_function,
            self.supabase.get_access_token,
            http_client=http_client,
        )
        self.krossbooking = KrossbookingClient(self.proxy, self.calendar_logger)

    def sign_in(self, email: Optional[str], password: Optional[str]) -> Optional[str]:
        """Sign in when credentials are given; returns the user id."""
        if not email or not password:
            return None
        self.supabase.sign_in(email, password)
        return self.supabase.get_user()["id"]

    def resolve_rooms(self, room_specs: Sequence[str], user_id: Optional[str]) -> List[UserRoom]:
        """Explicit rooms first, then the user's configured rooms, then HOSTDESK_ROOMS."""
        if room_specs:
            return parse_room_specs(room_specs)
        if user_id:
            rooms = self.supabase.get_user_rooms(user_id)
            if rooms:
                return rooms
        return parse_room_specs(app_config.cli_rooms.split(","))

    def load_month(self, month: date, rooms: Sequence[UserRoom]) -> MonthView:
        loader = CalendarViewLoader(lambda: list(rooms), self.krossbooking, self.calendar_logger)
        view = loader.load_month(month)
        self.logger.info(
            "Month loaded",
            month=view.month.isoformat(),
            rooms=len(view.rooms),
            reservations=len(view.reservations),
            tasks=len(view.tasks),
        )
        return view

    def close(self) -> None:
        self.proxy.close()


def format_event(event) -> str:
    label = event.kind.value.replace("_", " ")
    if isinstance(event, ReservationEvent):
        res = event.reservation
        return f"{label:<13} {event.room_name}: {res.guest_name} ({res.channel.style.name})"
    return f"{label:<13} {event.room_name}: {event.task.task_type} [{event.task.status}]"


def echo_month(view: MonthView) -> None:
    click.echo(f"\nCalendar {view.month.strftime('%B %Y')} ({len(view.rooms)} rooms)")
    if view.grid is None:
        click.echo("  No rooms configured")
        return
    for day in view.grid.days:
        if not day.events:
            continue
        marker = " *" if day.is_changeover else ""
        click.echo(f"{day.date.isoformat()}{marker}")
        for event in day.events:
            click.echo(f"  {format_event(event)}")
    if view.grid.changeover_dates:
        dates = ", ".join(d.strftime("%d") for d in view.grid.changeover_dates)
        click.echo(f"\n* Changeover days: {dates}")


@click.command()
@click.option('--month', 'month_value', type=str,
              help='Month to show as YYYY-MM (default: current month)')
@click.option('--room', 'room_specs', multiple=True,
              help='Room as ID or ID:NAME; repeat for several rooms')
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']),
              default=app_config.log_level.upper(), help='Logging level')
@click.option('--log-file', type=str,
              help='Log file path (optional)')
def main(month_value, room_specs, log_level, log_file):
    """
    Booking calendar for vacation rental hosts.

    Signs in with HOSTDESK_EMAIL and HOSTDESK_PASSWORD, fetches the month's
    reservations and housekeeping tasks through the Krossbooking proxy and
    prints each day's events.
    """
    try:
        month = parse_month(month_value)
    except ValueError:
        raise click.BadParameter(f"expected YYYY-MM, got {month_value!r}", param_hint="--month")

    booking_calendar = BookingCalendar(log_level, log_file)
    try:
        user_id = booking_calendar.sign_in(
            os.getenv("HOSTDESK_EMAIL"), os.getenv("HOSTDESK_PASSWORD")
        )
        rooms = booking_calendar.resolve_rooms(room_specs, user_id)
        if not rooms:
            click.echo("Error: no rooms given; use --room or set HOSTDESK_ROOMS")
            click.get_current_context().exit(1)

        view = booking_calendar.load_month(month, rooms)
        if view.error:
            click.echo(f"Error: {view.error}")
            click.get_current_context().exit(1)

        echo_month(view)
        booking_calendar.calendar_logger.print_summary()
    except AuthenticationError as e:
        click.echo(f"Authentication error: {e}")
        click.get_current_context().exit(1)
    except BackendError as e:
        click.echo(f"Error: {e}")
        click.get_current_context().exit(1)
    finally:
        booking_calendar.close()


if __name__ == "__main__":
    main()
