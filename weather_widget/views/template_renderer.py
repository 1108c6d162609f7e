"""Template rendering utilities for HTML views."""

from pathlib import Path

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from weather_widget.config import Settings
from weather_widget.map_surface import MapView
from weather_widget.models.widget_state import WidgetState

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"
templates = Jinja2Templates(directory=TEMPLATES_DIR)

ICON_SYMBOLS = {
    "clear": "☀️",
    "cloudy": "☁️",
    "rainy": "🌧️",
    "other": "🌡️",
}


class TemplateRenderer:
    """Handles rendering of Jinja2 templates for the widget page and tiles."""

    @staticmethod
    def render_index(request: Request, state: WidgetState, settings: Settings) -> HTMLResponse:
        """Render the widget page with the map centered on the session's location.

        Args:
            request: FastAPI request object
            state: Current state of the calling session
            settings: Settings instance

        Returns:
            HTMLResponse with the full page; the weather tile loads separately
        """
        map_view = MapView.from_settings(settings, center=state.map_center)
        return templates.TemplateResponse(
            request,
            "index.html",
            {
                "label": state.label,
                "map_view": map_view,
            },
        )

    @staticmethod
    def render_weather_tile(request: Request, state: WidgetState) -> HTMLResponse:
        """Render the weather tile fragment.

        Shows the loading line, the error line, or the weather card; the
        error and card are never shown together.

        Args:
            request: FastAPI request object
            state: Session state right after the triggering lookup

        Returns:
            HTMLResponse with rendered weather tile
        """
        card = state.card
        return templates.TemplateResponse(
            request,
            "tiles/weather.html",
            {
                "state": state,
                "card": card,
                "icon_symbol": ICON_SYMBOLS[card.icon.value] if card else "",
            },
        )
