"""
Content pages.
"""

from .page_client import PageClient

__all__ = ['PageClient']
