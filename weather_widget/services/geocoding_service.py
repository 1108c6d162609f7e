"""Geocoding service for the Open-Meteo geocoding API."""

import httpx
from pydantic import ValidationError

from weather_widget.config import Settings, get_settings
from weather_widget.exceptions import (
    GeocodingUnavailableException,
    InvalidPlaceNameException,
    LookupException,
    PlaceNotFoundException,
)
from weather_widget.logging_config import get_logger, log_with_context
from weather_widget.models.location import GeocodingResponse, Location

logger = get_logger(__name__)


async def resolve_place(client: httpx.AsyncClient, name: str, settings: Settings | None = None) -> Location:
    """Resolve a free-text place name to the first geocoding candidate.

    Candidates are used in the order the API returns them.

    Args:
        client: Shared HTTP client for making requests
        name: Place name; surrounding whitespace is ignored
        settings: Settings instance (defaults to singleton)

    Returns:
        Location with the candidate's coordinates and canonical name

    Raises:
        InvalidPlaceNameException: If the name is blank
        GeocodingUnavailableException: If the API answers with a non-success status
        PlaceNotFoundException: If the API returns no candidates
        LookupException: On network errors or an unreadable response
    """
    if settings is None:
        settings = get_settings()

    query = name.strip()
    if not query:
        raise InvalidPlaceNameException()

    params: dict[str, str | int] = {
        "name": query,
        "count": 1,
        "language": settings.geocoding_language,
        "format": "json",
    }
    if settings.open_meteo_api_key:
        params["apikey"] = settings.open_meteo_api_key

    try:
        response = await client.get(settings.geocoding_url, params=params, timeout=settings.http_timeout_seconds)
        response.raise_for_status()
        data = GeocodingResponse.model_validate(response.json())
    except httpx.HTTPStatusError as e:
        raise GeocodingUnavailableException(
            e.response.status_code,
            details={"api_response": e.response.text},
        ) from e
    except httpx.HTTPError as e:
        raise LookupException(details={"error_type": "network_error", "error": str(e)}) from e
    except (ValueError, ValidationError) as e:
        raise LookupException(details={"error_type": "parsing_error", "error": str(e)}) from e

    if not data.results:
        log_with_context(logger, "info", "No geocoding results", query=query, event_type="geocode_not_found")
        raise PlaceNotFoundException(query)

    first = data.results[0]
    location = Location(
        latitude=first.latitude,
        longitude=first.longitude,
        display_name=first.name or query,
    )
    log_with_context(
        logger,
        "debug",
        "Place resolved",
        query=query,
        display_name=location.display_name,
        latitude=location.latitude,
        longitude=location.longitude,
        event_type="geocode_resolved",
    )
    return location
