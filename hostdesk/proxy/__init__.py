"""
Serverless proxy boundary.
"""

from .proxy_client import ProxyClient

__all__ = ['ProxyClient']
