"""
FastAPI application factory
"""
import logging
import time
import traceback

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from subs_tracker.config import get_settings
from subs_tracker.infrastructure.db.session import check_db_connection
from subs_tracker.api.v1 import subscriptions

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("subs_tracker.http")


class ErrorLoggingMiddleware(BaseHTTPMiddleware):
    """Catches everything the routes did not turn into an HTTP response"""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            tb_str = traceback.format_exc()
            logger.error(f"\n{'='*60}\nERROR on {request.method} {request.url.path}\n{tb_str}{'='*60}")
            return Response(content="Internal Server Error", status_code=500)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One log line per request: 5xx as error, 4xx as warning, rest as info"""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        latency_ms = (time.perf_counter() - start) * 1000

        status_code = response.status_code
        if status_code >= 500:
            level = logging.ERROR
        elif status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO

        access_logger.log(
            level,
            "http request: status=%d method=%s path=%s query=%s latency_ms=%.3f",
            status_code,
            request.method,
            request.url.path,
            request.url.query,
            latency_ms,
        )
        return response


def configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(level=level)
    logging.getLogger().setLevel(level)


def create_app() -> FastAPI:
    """
    Application factory - создаёт и настраивает FastAPI приложение

    Returns:
        Настроенный FastAPI app
    """
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Subs Tracker",
        debug=settings.DEBUG,
    )

    # Order: the last added middleware runs first
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.add_middleware(ErrorLoggingMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(subscriptions.router)

    @app.get("/ping", response_class=PlainTextResponse, tags=["system"])
    def ping():
        return "pong"

    # Health checks
    @app.get("/health", response_class=PlainTextResponse, tags=["system"])
    def health():
        """Health check endpoint"""
        return "ok"

    @app.get("/ready", response_class=PlainTextResponse, tags=["system"])
    def ready():
        """Readiness check endpoint (проверяет доступность БД)"""
        check_db_connection()
        return "ok"

    logger.info("Application created: env=%s", settings.ENV)
    return app


# Create app instance
app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn"""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "subs_tracker.main:app",
        host=settings.HTTP_HOST,
        port=settings.HTTP_PORT,
    )
