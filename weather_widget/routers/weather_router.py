"""Weather API routes (JSON)."""

import httpx
from fastapi import APIRouter, Depends, Query, Request

from weather_widget.config import Settings, get_settings
from weather_widget.core.middleware import limiter, rate_limit_value
from weather_widget.dependencies import get_http_client, get_session_id, get_session_manager
from weather_widget.map_surface import clicked_location, default_center
from weather_widget.models import ErrorResponse, LookupResult, WeatherCard, WidgetState
from weather_widget.services import geocoding_service, weather_service
from weather_widget.state_managers import WidgetSessionManager

router = APIRouter()


@router.get(
    "/search",
    response_model=LookupResult,
    summary="Current weather for a place name",
    description="""
    Geocodes the place name (first candidate wins) and fetches current
    conditions there from Open-Meteo.

    **Rate Limited:** 60 requests/minute by default
    """,
    responses={
        404: {"model": ErrorResponse, "description": "No place matched the name"},
        422: {"model": ErrorResponse, "description": "Blank place name"},
        502: {"model": ErrorResponse, "description": "Geocoding or forecast API returned an error status"},
    },
)
@limiter.limit(rate_limit_value)
async def search_weather(
    request: Request,
    name: str = Query(description="Place name"),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
):
    """Stateless lookup by place name."""
    location = await geocoding_service.resolve_place(client, name, settings)
    conditions = await weather_service.fetch_conditions(client, location.latitude, location.longitude, settings)
    return LookupResult(location=location, conditions=conditions, card=WeatherCard.from_conditions(conditions))


@router.get(
    "/point",
    response_model=LookupResult,
    summary="Current weather for coordinates",
    responses={502: {"model": ErrorResponse, "description": "Forecast API returned an error status"}},
)
@limiter.limit(rate_limit_value)
async def point_weather(
    request: Request,
    lat: float = Query(description="Latitude"),
    lon: float = Query(description="Longitude"),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
):
    """Stateless lookup by coordinates; the location name is the coordinate label."""
    conditions = await weather_service.fetch_conditions(client, lat, lon, settings)
    return LookupResult(
        location=clicked_location(lat, lon),
        conditions=conditions,
        card=WeatherCard.from_conditions(conditions),
    )


@router.get("/state", response_model=WidgetState, summary="Widget state of the calling session")
async def session_state(
    session_id: str = Depends(get_session_id),
    manager: WidgetSessionManager = Depends(get_session_manager),
    settings: Settings = Depends(get_settings),
):
    """Current widget state; a session without a cookie sees a fresh, idle state."""
    controller = await manager.get(session_id)
    if controller is None:
        return WidgetState(label=settings.default_city, map_center=default_center(settings))
    return await controller.snapshot()
