"""
Krossbooking reservations and housekeeping tasks, fetched through the
booking proxy and mapped into internal records.
"""
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from ..proxy.proxy_client import ProxyClient
from ..utils.models import Channel, HousekeepingTask, Reservation, UserRoom
from ..utils.logger import get_logger, CalendarLogger

GET_RESERVATIONS = "get_reservations"
GET_HOUSEKEEPING_TASKS = "get_housekeeping_tasks"

RoomIds = Union[str, int, Sequence[Union[str, int]]]


def _as_list(room_ids: RoomIds) -> List[str]:
    if isinstance(room_ids, (str, int)):
        return [str(room_ids)]
    return [str(r) for r in room_ids]


def _records(payload: Any, key: str) -> Optional[List[Any]]:
    """Pull the record list out of a proxy payload, None when the shape is unknown."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        if payload.get("success") is False:
            return None
        records = payload.get(key)
        if records is None and isinstance(payload.get("data"), list):
            records = payload["data"]
        if isinstance(records, list):
            return records
    return None


def map_reservation(record: Dict[str, Any]) -> Reservation:
    """Map one upstream reservation record. Raises KeyError/TypeError on bad shape."""
    channel_code = record.get("channel_identifier") or record.get("cod_channel")
    return Reservation(
        id=str(record["id"]),
        guest_name=record.get("guest_name") or "",
        property_name=str(record.get("property_name") or ""),
        check_in_date=record["check_in_date"],
        check_out_date=record["check_out_date"],
        status=record.get("status") or "",
        amount=str(record.get("amount") if record.get("amount") is not None else ""),
        channel=Channel.from_code(channel_code),
        ota_id=record.get("ota_id"),
    )


def map_housekeeping_task(record: Dict[str, Any]) -> HousekeepingTask:
    """Map one upstream housekeeping task record."""
    return HousekeepingTask(
        id=str(record["id_task"]),
        room_id=str(record["id_room"]),
        date=record["date"],
        task_type=record.get("task_type") or "",
        status=record.get("status") or "",
        notes=record.get("notes"),
    )


def filter_reservations_for_rooms(
    reservations: Iterable[Reservation], rooms: Iterable[UserRoom]
) -> List[Reservation]:
    """
    Keep reservations that belong to one of the rooms.

    The upstream filter by room is not reliable, so results are always
    re-filtered here by room name or room id.
    """
    rooms = list(rooms)
    return [r for r in reservations if any(r.belongs_to(room) for room in rooms)]


class KrossbookingClient:
    """Reads reservations and housekeeping tasks from the channel manager."""

    def __init__(self, proxy: ProxyClient, calendar_logger: Optional[CalendarLogger] = None):
        self.proxy = proxy
        self.logger = get_logger("krossbooking_client")
        self.calendar_logger = calendar_logger or CalendarLogger(self.logger)

    def fetch_reservations(self, room_ids: RoomIds) -> List[Reservation]:
        """
        Fetch reservations for one or more rooms.

        Args:
            room_ids: A room id or a list of room ids

        Returns:
            Mapped reservations; may include rooms that were not requested

        Raises:
            AuthenticationError: No usable session
            ProxyError: The proxy answered with a non-2xx status
        """
        ids = _as_list(room_ids)
        if not ids:
            return []
        params: Dict[str, Any] = {"room_id": ids[0]} if len(ids) == 1 else {"room_ids": ids}
        payload = self.proxy.call(GET_RESERVATIONS, **params)

        records = _records(payload, "reservations")
        if records is None:
            self.logger.warning("Unexpected reservations response structure", response=payload)
            return []

        reservations = []
        for record in records:
            try:
                reservations.append(map_reservation(record))
            except (KeyError, TypeError, AttributeError):
                self.calendar_logger.log_malformed_record(record, "reservation")
        self.calendar_logger.log_reservations_fetched(reservations)
        return reservations

    def fetch_housekeeping_tasks(
        self, start_date: date, end_date: date, room_ids: RoomIds
    ) -> List[HousekeepingTask]:
        """Fetch housekeeping tasks between two dates (inclusive) for numeric room ids."""
        numeric_ids = [int(r) for r in _as_list(room_ids) if r.strip().isdigit()]
        if not numeric_ids:
            return []
        payload = self.proxy.call(
            GET_HOUSEKEEPING_TASKS,
            date_from=start_date.isoformat(),
            date_to=end_date.isoformat(),
            id_rooms=numeric_ids,
        )

        records = _records(payload, "tasks")
        if records is None:
            self.logger.warning("Unexpected housekeeping response structure", response=payload)
            return []

        tasks = []
        for record in records:
            try:
                tasks.append(map_housekeeping_task(record))
            except (KeyError, TypeError, AttributeError):
                self.calendar_logger.log_malformed_record(record, "housekeeping_task")
        self.calendar_logger.log_tasks_fetched(tasks)
        return tasks
