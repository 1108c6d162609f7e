"""Middleware configuration."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from slowapi import Limiter
from slowapi.util import get_remote_address

from weather_widget.config import Settings, get_settings
from weather_widget.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

# Shared limiter for this app's own endpoints; upstream calls are not limited
limiter = Limiter(key_func=get_remote_address)


def rate_limit_value() -> str:
    """Per-IP limit applied to widget endpoints."""
    return get_settings().rate_limit


def setup_middleware(app: FastAPI, settings: Settings) -> Limiter:
    """Configure all middleware for the application.

    Args:
        app: FastAPI application instance
        settings: Application settings

    Returns:
        Limiter instance for rate limiting
    """
    log_with_context(
        logger,
        "info",
        "Configuring CORS middleware with regex pattern",
        event_type="security_config",
        pattern=settings.cors_origin_regex,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # Trusted hosts - prevent host header injection
    trusted_hosts = settings.trusted_host_list
    log_with_context(
        logger,
        "info",
        "Configuring TrustedHost middleware",
        event_type="security_config",
        hosts=trusted_hosts,
    )
    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=trusted_hosts,
    )

    app.state.limiter = limiter

    @app.middleware("http")
    async def count_requests(request, call_next):
        """Count total requests for the readiness endpoint."""
        app.state.request_count = getattr(app.state, "request_count", 0) + 1
        return await call_next(request)

    return limiter
