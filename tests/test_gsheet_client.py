"""
Unit tests for the spreadsheet client.
"""
import pytest
from unittest.mock import Mock

from hostdesk.gsheets.gsheet_client import GSheetClient
from hostdesk.proxy.proxy_client import ProxyClient
from hostdesk.utils.errors import ProxyError


@pytest.fixture
def proxy():
    return Mock(spec=ProxyClient)


@pytest.fixture
def gsheet(proxy):
    return GSheetClient(proxy)


def test_read_default_range(gsheet, proxy):
    proxy.call.return_value = [["Mois", "CA"], ["Janvier", "1200"]]

    rows = gsheet.read_sheet()

    proxy.call.assert_called_once_with("read_sheet", range="Sheet1!A1:Z100")
    assert rows == [["Mois", "CA"], ["Janvier", "1200"]]


def test_read_explicit_range(gsheet, proxy):
    proxy.call.return_value = [["x"]]
    gsheet.read_sheet("Finances!B2:C10")
    proxy.call.assert_called_once_with("read_sheet", range="Finances!B2:C10")


@pytest.mark.parametrize("payload", [None, {"values": []}, "oops"])
def test_read_without_rows(gsheet, proxy, payload):
    proxy.call.return_value = payload
    assert gsheet.read_sheet() == []


def test_write_sheet(gsheet, proxy):
    proxy.call.return_value = {"updatedCells": 2}

    result = gsheet.write_sheet("Sheet1!A1", [["a", 1]])

    proxy.call.assert_called_once_with("write_sheet", range="Sheet1!A1", values=[["a", 1]])
    assert result == {"updatedCells": 2}


@pytest.mark.parametrize("values", [None, "a,b", [1, 2], [["ok"], "row"]])
def test_write_rejects_non_rows(gsheet, proxy, values):
    with pytest.raises(ValueError, match="Invalid 'values'"):
        gsheet.write_sheet("Sheet1!A1", values)
    proxy.call.assert_not_called()


def test_write_error_propagates(gsheet, proxy):
    proxy.call.side_effect = ProxyError("write_sheet", 403, "Forbidden: Admin access required.")
    with pytest.raises(ProxyError):
        gsheet.write_sheet("Sheet1!A1", [["a"]])
