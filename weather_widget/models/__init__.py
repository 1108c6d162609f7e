"""Weather widget models"""

from weather_widget.models.base_models import DetailedHealthResponse, ErrorResponse, HealthResponse
from weather_widget.models.location import Coordinates, GeocodingResponse, Location
from weather_widget.models.weather import CurrentConditions, ForecastResponse, LookupResult, WeatherCard
from weather_widget.models.widget_state import LookupPhase, WidgetState

__all__ = [
    "Coordinates",
    "CurrentConditions",
    "DetailedHealthResponse",
    "ErrorResponse",
    "ForecastResponse",
    "GeocodingResponse",
    "HealthResponse",
    "Location",
    "LookupPhase",
    "LookupResult",
    "WeatherCard",
    "WidgetState",
]
