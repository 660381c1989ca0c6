"""
Financial spreadsheet access through the spreadsheet proxy.
"""
from typing import Any, List, Optional

from ..proxy.proxy_client import ProxyClient
from ..utils.logger import get_logger
from config.settings import app_config


class GSheetClient:
    """Reads and writes row ranges of the configured spreadsheet."""

    def __init__(self, proxy: ProxyClient):
        self.proxy = proxy
        self.logger = get_logger("gsheet_client")

    def read_sheet(self, range: Optional[str] = None) -> List[List[Any]]:
        """Rows of a range, e.g. ``Sheet1!A1:Z100``. Empty ranges give []."""
        sheet_range = range or app_config.default_sheet_range
        rows = self.proxy.call("read_sheet", range=sheet_range)
        if rows is None:
            return []
        if not isinstance(rows, list):
            self.logger.warning("Unexpected sheet response structure", range=sheet_range, response=rows)
            return []
        self.logger.info("Sheet range read", range=sheet_range, rows=len(rows))
        return rows

    def write_sheet(self, range: str, values: List[List[Any]]) -> Any:
        """
        Overwrite a range with raw values.

        Raises:
            ValueError: values is not a list of rows
        """
        if not isinstance(values, list) or not all(isinstance(row, list) for row in values):
            raise ValueError("Invalid 'values' provided for write_sheet action.")
        sheet_range = range or app_config.default_write_range
        result = self.proxy.call("write_sheet", range=sheet_range, values=values)
        self.logger.info("Sheet range written", range=sheet_range, rows=len(values))
        return result
