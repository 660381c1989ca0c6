"""
Configuration module for the hostdesk backend.
"""

from .settings import supabase_config, proxy_config, app_config

__all__ = ['supabase_config', 'proxy_config', 'app_config']
