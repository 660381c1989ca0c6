"""
Channel-manager reservations and housekeeping tasks.
"""

from .krossbooking_client import (
    KrossbookingClient, map_reservation, map_housekeeping_task,
    filter_reservations_for_rooms
)

__all__ = [
    'KrossbookingClient', 'map_reservation', 'map_housekeeping_task',
    'filter_reservations_for_rooms'
]
