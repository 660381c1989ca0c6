"""
Dependency injection and per-request service wiring for the FastAPI application.
"""
from dataclasses import dataclass
from typing import Optional

import httpx
from fastapi import Depends, HTTPException, Request

from ..supabase_sync.supabase_client import SupabaseClient
from ..proxy.proxy_client import ProxyClient
from ..krossbooking.krossbooking_client import KrossbookingClient
from ..gsheets.gsheet_client import GSheetClient
from ..pages.page_client import PageClient
from ..utils.errors import AuthenticationError, BackendError
from ..utils.logger import setup_logger, CalendarLogger
from .config import settings
from .services.calendar_service import CalendarService
from .services.room_service import RoomService
from .services.dashboard_service import DashboardService
from config.settings import proxy_config


_logger = None
_http_client: Optional[httpx.Client] = None


def get_logger():
    """Get application logger instance."""
    global _logger
    if _logger is None:
        _logger = setup_logger("fastapi_app", settings.log_level)
    return _logger


def get_http_client() -> httpx.Client:
    """Shared HTTP connection pool for proxy calls."""
    global _http_client
    if _http_client is None:
        _http_client = httpx.Client()
    return _http_client


def close_http_client() -> None:
    global _http_client
    if _http_client is not None:
        _http_client.close()
        _http_client = None


@dataclass
class RequestContext:
    """Authenticated caller of one request."""
    user_id: str
    email: Optional[str]
    access_token: str
    supabase: SupabaseClient

    def proxy(self, function_name: str) -> ProxyClient:
        return ProxyClient(function_name, lambda: self.access_token, http_client=get_http_client())


def _bearer_token(request: Request) -> str:
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        raise HTTPException(status_code=401, detail={"message": "Unauthorized", "error_code": "UNAUTHORIZED"})
    return auth_header.split(" ", 1)[1].strip()


def get_request_context(request: Request) -> RequestContext:
    """Resolve the Supabase user behind the request's bearer token."""
    token = _bearer_token(request)
    supabase = SupabaseClient(access_token=token)
    try:
        user = supabase.get_user(token)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail={"message": str(e), "error_code": "UNAUTHORIZED"})
    except BackendError as e:
        raise HTTPException(status_code=503, detail={"message": str(e), "error_code": "BACKEND_UNAVAILABLE"})
    request.state.user_id = user["id"]
    return RequestContext(user_id=user["id"], email=user.get("email"), access_token=token, supabase=supabase)


def get_krossbooking_client(context: RequestContext = Depends(get_request_context)) -> KrossbookingClient:
    proxy = context.proxy(proxy_config.krossbooking_function)
    return KrossbookingClient(proxy, CalendarLogger(get_logger()))


def get_calendar_service(
    context: RequestContext = Depends(get_request_context),
    krossbooking: KrossbookingClient = Depends(get_krossbooking_client),
) -> CalendarService:
    return CalendarService(context.supabase, krossbooking, context.user_id)


def get_room_service(context: RequestContext = Depends(get_request_context)) -> RoomService:
    return RoomService(context.supabase, context.user_id)


def get_dashboard_service(
    context: RequestContext = Depends(get_request_context),
    krossbooking: KrossbookingClient = Depends(get_krossbooking_client),
) -> DashboardService:
    return DashboardService(context.supabase, krossbooking, context.user_id)


def get_gsheet_client(context: RequestContext = Depends(get_request_context)) -> GSheetClient:
    return GSheetClient(context.proxy(proxy_config.gsheet_function))


def get_page_client(context: RequestContext = Depends(get_request_context)) -> PageClient:
    return PageClient(context.proxy(proxy_config.page_manager_function))
