"""
HTTP API for the hostdesk dashboard.
"""
from .app import create_app

__all__ = ['create_app']
