"""
Spreadsheet read/write through the spreadsheet proxy.
"""

from .gsheet_client import GSheetClient

__all__ = ['GSheetClient']
