"""
Unit tests for the serverless proxy client.
"""
import json
import pytest
import httpx

from config.settings import proxy_config
from hostdesk.proxy.proxy_client import ProxyClient
from hostdesk.utils.errors import AuthenticationError, ProxyError

PROXY_URL = "https://project.supabase.co/functions/v1/krossbooking-proxy"


def _proxy(handler, token="session-token"):
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    return ProxyClient("krossbooking-proxy", lambda: token, http_client=http_client, url=PROXY_URL)


def test_posts_action_and_params_with_bearer_token():
    captured = {}

    def handler(request):
        captured["request"] = request
        return httpx.Response(200, json={"data": [{"id": 1}]})

    result = _proxy(handler).call("get_reservations", room_id="101")

    request = captured["request"]
    assert result == [{"id": 1}]
    assert request.method == "POST"
    assert str(request.url) == PROXY_URL
    assert request.headers["Authorization"] == "Bearer session-token"
    assert json.loads(request.content) == {"action": "get_reservations", "room_id": "101"}


def test_returns_whole_body_without_data_member():
    def handler(request):
        return httpx.Response(200, json={"reservations": [], "success": True})

    assert _proxy(handler).call("get_reservations") == {"reservations": [], "success": True}


def test_non_success_status_raises_with_upstream_error():
    def handler(request):
        return httpx.Response(500, json={"error": "Krossbooking API error: 503"})

    with pytest.raises(ProxyError) as exc_info:
        _proxy(handler).call("get_reservations", room_id="101")

    error = exc_info.value
    assert error.status_code == 500
    assert error.action == "get_reservations"
    assert error.upstream_error == "Krossbooking API error: 503"
    assert "Krossbooking API error: 503" in str(error)


def test_forbidden_keeps_status():
    def handler(request):
        return httpx.Response(403, json={"error": "Forbidden: Admin access required."})

    with pytest.raises(ProxyError) as exc_info:
        _proxy(handler).call("write_sheet", range="Sheet1!A1", values=[["x"]])

    assert exc_info.value.status_code == 403


def test_unauthorized_status_raises_authentication_error():
    def handler(request):
        return httpx.Response(401, json={"error": "Unauthorized: User not authenticated."})

    with pytest.raises(AuthenticationError, match="User not authenticated"):
        _proxy(handler).call("get_reservations")


def test_missing_token_fails_before_request():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={})

    with pytest.raises(AuthenticationError):
        _proxy(handler, token="").call("get_reservations")
    assert calls == []


def test_non_json_error_body():
    def handler(request):
        return httpx.Response(502, text="Bad Gateway")

    with pytest.raises(ProxyError) as exc_info:
        _proxy(handler).call("read_sheet")

    assert exc_info.value.upstream_error == "Bad Gateway"


def test_transport_failure_raises_proxy_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ProxyError) as exc_info:
        _proxy(handler).call("get_reservations")

    assert exc_info.value.status_code == 0


def test_configured_timeout_is_applied(monkeypatch):
    monkeypatch.setattr(proxy_config, "timeout_seconds", 7.5)
    captured = {}

    def handler(request):
        captured["timeout"] = request.extensions["timeout"]
        return httpx.Response(200, json={"data": []})

    _proxy(handler).call("get_reservations")

    assert captured["timeout"]["read"] == 7.5


def test_default_url_comes_from_config(monkeypatch):
    monkeypatch.setattr(proxy_config, "functions_url", "https://fn.example.com/functions/v1/")
    client = ProxyClient("gsheet-proxy", lambda: "token", http_client=httpx.Client())

    assert client.url == "https://fn.example.com/functions/v1/gsheet-proxy"


def test_close_leaves_shared_client_open():
    http_client = httpx.Client()
    with ProxyClient("gsheet-proxy", lambda: "token", http_client=http_client, url=PROXY_URL):
        pass

    assert http_client.is_closed is False
