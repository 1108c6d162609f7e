"""Page/view routes for serving the widget page and weather tile fragments."""

import httpx
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse

from weather_widget.config import Settings, get_settings
from weather_widget.core.middleware import limiter, rate_limit_value
from weather_widget.dependencies import get_http_client, get_widget_controller, set_session_cookie
from weather_widget.services.lookup_service import LookupController
from weather_widget.views.template_renderer import TemplateRenderer

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    controller: LookupController = Depends(get_widget_controller),
    settings: Settings = Depends(get_settings),
):
    """Render the widget page."""
    state = await controller.snapshot()
    response = TemplateRenderer.render_index(request, state, settings)
    return set_session_cookie(request, response, settings)


@router.get("/tiles/weather", response_class=HTMLResponse)
@limiter.limit(rate_limit_value)
async def weather_tile(
    request: Request,
    client: httpx.AsyncClient = Depends(get_http_client),
    controller: LookupController = Depends(get_widget_controller),
    settings: Settings = Depends(get_settings),
):
    """Render the session's weather tile, looking up the default city on first load."""
    state = await controller.ensure_mounted(client, settings)
    response = TemplateRenderer.render_weather_tile(request, state)
    return set_session_cookie(request, response, settings)


@router.get("/tiles/weather/search", response_class=HTMLResponse)
@limiter.limit(rate_limit_value)
async def search_tile(
    request: Request,
    city: str = Query(default="", description="Place name typed into the search form"),
    client: httpx.AsyncClient = Depends(get_http_client),
    controller: LookupController = Depends(get_widget_controller),
    settings: Settings = Depends(get_settings),
):
    """Search form submission: geocode the city and render its weather."""
    state = await controller.search(client, settings, city)
    response = TemplateRenderer.render_weather_tile(request, state)
    return set_session_cookie(request, response, settings)


@router.get("/tiles/weather/point", response_class=HTMLResponse)
@limiter.limit(rate_limit_value)
async def point_tile(
    request: Request,
    lat: float = Query(description="Clicked latitude"),
    lon: float = Query(description="Clicked longitude"),
    client: httpx.AsyncClient = Depends(get_http_client),
    controller: LookupController = Depends(get_widget_controller),
    settings: Settings = Depends(get_settings),
):
    """Map click: render the weather at the clicked point."""
    state = await controller.select_point(client, settings, lat, lon)
    response = TemplateRenderer.render_weather_tile(request, state)
    return set_session_cookie(request, response, settings)
