"""Application lifespan management."""

import time
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any

import httpx
from fastapi import FastAPI

from weather_widget import __version__
from weather_widget.config import get_settings
from weather_widget.logging_config import get_logger, log_with_context
from weather_widget.middleware.logging_middleware import redact_sensitive_data
from weather_widget.state_managers import WidgetSessionManager

logger = get_logger(__name__)


async def log_request(request: httpx.Request) -> None:
    """Event hook to log upstream requests with redacted sensitive data."""
    log_with_context(
        logger,
        "info",
        "HTTP Request",
        method=request.method,
        url=redact_sensitive_data(str(request.url)),
        event_type="http_request",
    )


async def log_response(response: httpx.Response) -> None:
    """Event hook to log upstream responses with redacted sensitive data."""
    log_with_context(
        logger,
        "info",
        "HTTP Response",
        status_code=response.status_code,
        url=redact_sensitive_data(str(response.request.url)),
        event_type="http_response",
    )


def create_http_client(timeout_seconds: float | None = None) -> httpx.AsyncClient:
    """Create the shared upstream client.

    Args:
        timeout_seconds: Request timeout, or None to wait indefinitely

    Returns:
        AsyncClient with connection pooling and logging hooks
    """
    event_hooks: dict[str, list[Callable[..., Any]]] = {
        "request": [log_request],
        "response": [log_response],
    }
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout_seconds),
        limits=httpx.Limits(
            max_keepalive_connections=5,
            max_connections=10,
            keepalive_expiry=30.0,
        ),
        follow_redirects=True,
        event_hooks=event_hooks,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan - startup and shutdown events.

    Exceptions after yield are re-raised so cleanup always runs.
    """
    settings = get_settings()
    app.state.startup_time = time.time()
    app.state.request_count = 0

    log_with_context(
        logger,
        "info",
        "Starting weather widget",
        version=__version__,
        event_type="app_startup",
    )

    client = create_http_client(settings.http_timeout_seconds)
    app.state.http_client = client
    log_with_context(
        logger,
        "info",
        "HTTP client initialized successfully",
        timeout_seconds=settings.http_timeout_seconds,
        event_type="http_client_ready",
    )

    app.state.session_manager = WidgetSessionManager(max_sessions=settings.max_sessions)
    await app.state.session_manager.initialize()
    log_with_context(
        logger,
        "info",
        "Session manager initialized",
        max_sessions=settings.max_sessions,
        event_type="state_managers_ready",
    )

    try:
        yield
    except Exception as e:
        log_with_context(
            logger,
            "error",
            "Application error during lifespan",
            error=str(e),
            error_type=type(e).__name__,
            event_type="app_error",
        )
        raise
    finally:
        log_with_context(
            logger,
            "info",
            "Shutting down weather widget",
            event_type="app_shutdown",
        )

        await app.state.session_manager.cleanup()
        await client.aclose()
        log_with_context(
            logger,
            "info",
            "HTTP client closed",
            event_type="http_client_cleanup",
        )
