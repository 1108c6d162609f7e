"""Weather service for the Open-Meteo forecast API."""

import httpx

from weather_widget.config import Settings, get_settings
from weather_widget.exceptions import LookupException, WeatherUnavailableException
from weather_widget.logging_config import get_logger, log_with_context
from weather_widget.models.weather import CURRENT_FIELDS, CurrentConditions, ForecastResponse

logger = get_logger(__name__)


async def fetch_conditions(
    client: httpx.AsyncClient,
    latitude: float,
    longitude: float,
    settings: Settings | None = None,
) -> CurrentConditions:
    """Get current conditions for a coordinate pair.

    Coordinates are sent as given. Fields missing from the response come
    back as None rather than raising.

    Args:
        client: Shared HTTP client for making requests
        latitude: Latitude in degrees
        longitude: Longitude in degrees
        settings: Settings instance (defaults to singleton)

    Returns:
        CurrentConditions parsed from the ``current`` block

    Raises:
        WeatherUnavailableException: If the API answers with a non-success status
        LookupException: On network errors or a body that is not JSON
    """
    if settings is None:
        settings = get_settings()

    params: dict[str, str | float] = {
        "latitude": latitude,
        "longitude": longitude,
        "current": ",".join(CURRENT_FIELDS),
        "timezone": settings.timezone,
    }
    if settings.open_meteo_api_key:
        params["apikey"] = settings.open_meteo_api_key

    try:
        response = await client.get(settings.forecast_url, params=params, timeout=settings.http_timeout_seconds)
        response.raise_for_status()
        payload = response.json()
    except httpx.HTTPStatusError as e:
        raise WeatherUnavailableException(
            e.response.status_code,
            details={"api_response": e.response.text},
        ) from e
    except httpx.HTTPError as e:
        raise LookupException(details={"error_type": "network_error", "error": str(e)}) from e
    except ValueError as e:
        raise LookupException(details={"error_type": "parsing_error", "error": str(e)}) from e

    forecast = ForecastResponse.model_validate(payload if isinstance(payload, dict) else {})
    conditions = forecast.current

    missing = [name for name, value in conditions.model_dump().items() if value is None]
    if missing:
        log_with_context(
            logger,
            "warning",
            "Forecast response missing fields",
            missing_fields=missing,
            latitude=latitude,
            longitude=longitude,
            event_type="forecast_fields_missing",
        )
    return conditions
