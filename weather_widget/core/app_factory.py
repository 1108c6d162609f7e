"""Application factory for creating and configuring the FastAPI app."""

from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from weather_widget import __version__
from weather_widget.config import get_settings
from weather_widget.core.lifespan import lifespan
from weather_widget.core.middleware import setup_middleware
from weather_widget.middleware.error_handlers import register_error_handlers
from weather_widget.routers import geocoding_router, health_router, view_router, weather_router

STATIC_DIR = Path(__file__).parent.parent / "static"


def custom_openapi(app: FastAPI):
    """Generate the OpenAPI schema without the HTML tile endpoints."""
    if app.openapi_schema:
        return app.openapi_schema

    from fastapi.openapi.utils import get_openapi

    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
        license_info=app.license_info,
    )

    # Tile endpoints are HTML fragments for HTMX, not useful in API docs
    paths = openapi_schema.get("paths", {})
    for path in [p for p in paths if p.startswith("/tiles/")]:
        del paths[path]

    app.openapi_schema = openapi_schema
    return app.openapi_schema


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Weather Widget",
        description="""
        🌤️ **Weather Widget** - current conditions for a city or a point on the map

        ## Pages
        - `/` - search form, map and weather card

        ## JSON API
        - `/api/geocode?name=` - resolve a place name
        - `/api/weather/search?name=` - weather for a place name
        - `/api/weather/point?lat=&lon=` - weather for coordinates
        - `/api/weather/state` - widget state of the calling session

        ## 📊 Health
        - `/health`, `/health/live`, `/health/ready`

        ## ⚡ Rate Limits
        - Lookup endpoints: 60 requests/minute per IP by default
        """,
        version=__version__,
        lifespan=lifespan,
        license_info={
            "name": "MIT",
        },
    )

    setup_middleware(app, settings)
    register_error_handlers(app)

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    # View routes (HTML page and tile fragments) - no prefix
    app.include_router(view_router.router, tags=["views"])
    app.include_router(health_router.router, tags=["health"])

    # API routes
    app.include_router(geocoding_router.router, prefix="/api/geocode", tags=["geocoding"])
    app.include_router(weather_router.router, prefix="/api/weather", tags=["weather"])

    app.openapi = lambda: custom_openapi(app)

    return app
