"""
Supabase access: sessions, rooms and profiles.
"""

from .supabase_client import SupabaseClient

__all__ = ['SupabaseClient']
