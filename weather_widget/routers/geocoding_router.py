"""Geocoding API route (JSON)."""

import httpx
from fastapi import APIRouter, Depends, Query, Request

from weather_widget.config import Settings, get_settings
from weather_widget.core.middleware import limiter, rate_limit_value
from weather_widget.dependencies import get_http_client
from weather_widget.models import ErrorResponse, Location
from weather_widget.services import geocoding_service

router = APIRouter()


@router.get(
    "",
    response_model=Location,
    summary="Resolve a place name",
    responses={
        404: {"model": ErrorResponse, "description": "No place matched the name"},
        422: {"model": ErrorResponse, "description": "Blank place name"},
        502: {"model": ErrorResponse, "description": "Geocoding API returned an error status"},
    },
)
@limiter.limit(rate_limit_value)
async def geocode(
    request: Request,
    name: str = Query(description="Place name"),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
):
    """Resolve a place name to the first geocoding candidate."""
    return await geocoding_service.resolve_place(client, name, settings)
