"""
hostdesk - property-management backend for short-term rental hosts.

Mirrors bookings and housekeeping tasks from the channel manager, keeps
per-user room configuration in Supabase and builds the monthly booking
calendar.
"""

__version__ = "1.0.0"
__author__ = "hostdesk team"
__description__ = "Booking calendar, room configuration and reporting for rental hosts"
