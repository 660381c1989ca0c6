"""
Main FastAPI application factory.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .dependencies import get_logger, close_http_client
from .routes import calendar, rooms, profile, sheets, pages, dashboard, health
from .models import ErrorResponse


logger = get_logger()


def _error_content(message: str, error_code: str, details=None) -> dict:
    return ErrorResponse(
        success=False,
        message=message,
        error_code=error_code,
        details=details
    ).model_dump(mode="json")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    logger.info("Starting FastAPI application", environment=settings.environment, api_version=settings.api_version)
    if not settings.supabase_url:
        logger.warning("SUPABASE_URL is not set; authenticated endpoints will fail")

    yield

    logger.info("Shutting down FastAPI application")
    close_http_client()


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        description=settings.app_description,
        version=settings.app_version,
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=f"{settings.api_prefix}/redoc",
        openapi_url=f"{settings.api_prefix}/openapi.json",
        lifespan=lifespan
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Render HTTPException details in the error envelope."""
        detail = exc.detail if isinstance(exc.detail, dict) else {"message": str(exc.detail)}
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_content(
                detail.get("message", "Request failed"),
                detail.get("error_code", "HTTP_ERROR"),
                detail.get("details"),
            ),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content=_error_content(
                "Invalid request",
                "VALIDATION_ERROR",
                {"errors": [{"loc": list(e["loc"]), "msg": e["msg"]} for e in exc.errors()]},
            ),
        )

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler for unhandled errors."""
        logger.error("Unhandled exception", path=request.url.path, error=str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_content("Internal server error", "INTERNAL_ERROR", {"error": str(exc)})
        )

    @app.middleware("http")
    async def auth_middleware(request: Request, call_next):
        path = request.url.path
        open_paths = {
            f"{settings.api_prefix}/{settings.api_version}/health",
            f"{settings.api_prefix}/docs",
            f"{settings.api_prefix}/redoc",
            f"{settings.api_prefix}/openapi.json",
        }
        if request.method == "OPTIONS" or path == "/" or any(path.startswith(p) for p in open_paths):
            return await call_next(request)

        auth_header = request.headers.get("Authorization", "")
        if not auth_header.startswith("Bearer ") or not auth_header[7:].strip():
            return JSONResponse(
                status_code=401,
                content=_error_content("Unauthorized", "UNAUTHORIZED")
            )
        return await call_next(request)

    # Include routers with versioning
    for module in (calendar, rooms, profile, sheets, pages, dashboard, health):
        app.include_router(
            module.router,
            prefix=f"{settings.api_prefix}/{settings.api_version}"
        )

    # Root endpoint
    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "message": "hostdesk API is running",
            "version": settings.api_version,
            "environment": settings.environment,
            "docs": f"{settings.api_prefix}/docs"
        }

    return app
