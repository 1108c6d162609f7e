"""Unit tests for the geocoding service."""

import httpx
import pytest

from tests.conftest import GEOCODING_URL, make_response
from weather_widget.exceptions import (
    ErrorCode,
    GeocodingUnavailableException,
    InvalidPlaceNameException,
    LookupException,
    PlaceNotFoundException,
)
from weather_widget.models.location import Location
from weather_widget.services import geocoding_service


@pytest.mark.asyncio
async def test_resolve_place_success(mock_http_client, mock_settings, mock_geocoding_response):
    """Test the first candidate is returned as given by the API."""
    mock_http_client.get.return_value = make_response(200, GEOCODING_URL, json=mock_geocoding_response)

    location = await geocoding_service.resolve_place(mock_http_client, "東京", mock_settings)

    assert isinstance(location, Location)
    assert location.display_name == "東京"
    assert location.latitude == 35.6895
    assert location.longitude == 139.69171

    mock_http_client.get.assert_called_once()
    call_args = mock_http_client.get.call_args
    assert call_args.args[0] == GEOCODING_URL
    params = call_args.kwargs["params"]
    assert params == {"name": "東京", "count": 1, "language": "ja", "format": "json"}


@pytest.mark.asyncio
async def test_resolve_place_strips_whitespace(mock_http_client, mock_settings, mock_geocoding_response):
    mock_http_client.get.return_value = make_response(200, GEOCODING_URL, json=mock_geocoding_response)

    await geocoding_service.resolve_place(mock_http_client, "  東京 \n", mock_settings)

    assert mock_http_client.get.call_args.kwargs["params"]["name"] == "東京"


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", "   ", "\t\n"])
async def test_resolve_place_blank_name(mock_http_client, mock_settings, name):
    """Test a blank name is rejected before any request."""
    with pytest.raises(InvalidPlaceNameException) as exc_info:
        await geocoding_service.resolve_place(mock_http_client, name, mock_settings)

    assert exc_info.value.status_code == 422
    mock_http_client.get.assert_not_called()


@pytest.mark.asyncio
async def test_resolve_place_api_error(mock_http_client, mock_settings):
    """Test a non-success status becomes GeocodingUnavailableException carrying the status."""
    mock_http_client.get.return_value = make_response(503, GEOCODING_URL, text="Service Unavailable")

    with pytest.raises(GeocodingUnavailableException) as exc_info:
        await geocoding_service.resolve_place(mock_http_client, "東京", mock_settings)

    assert exc_info.value.upstream_status == 503
    assert exc_info.value.code == ErrorCode.GEOCODING_UNAVAILABLE
    assert exc_info.value.message == "位置情報の取得エラー! ステータス: 503"
    assert exc_info.value.details["api_response"] == "Service Unavailable"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [{"generationtime_ms": 0.3}, {"results": []}, {"results": None}],
)
async def test_resolve_place_not_found(mock_http_client, mock_settings, payload):
    """Test absent, empty or null results mean the place was not found."""
    mock_http_client.get.return_value = make_response(200, GEOCODING_URL, json=payload)

    with pytest.raises(PlaceNotFoundException) as exc_info:
        await geocoding_service.resolve_place(mock_http_client, " どこにもない町 ", mock_settings)

    assert exc_info.value.message == "都市が見つかりません"
    assert exc_info.value.status_code == 404
    assert exc_info.value.place == "どこにもない町"


@pytest.mark.asyncio
async def test_resolve_place_missing_name_uses_query(mock_http_client, mock_settings):
    mock_http_client.get.return_value = make_response(
        200, GEOCODING_URL, json={"results": [{"latitude": 1.5, "longitude": 2.5}]}
    )

    location = await geocoding_service.resolve_place(mock_http_client, "Somewhere", mock_settings)

    assert location.display_name == "Somewhere"


@pytest.mark.asyncio
async def test_resolve_place_network_error(mock_http_client, mock_settings):
    """Test transport failures become a generic LookupException."""
    mock_http_client.get.side_effect = httpx.ConnectError("Connection failed")

    with pytest.raises(LookupException) as exc_info:
        await geocoding_service.resolve_place(mock_http_client, "東京", mock_settings)

    assert exc_info.value.code == ErrorCode.LOOKUP_FAILED
    assert exc_info.value.details["error_type"] == "network_error"


@pytest.mark.asyncio
async def test_resolve_place_invalid_json(mock_http_client, mock_settings):
    mock_http_client.get.return_value = make_response(200, GEOCODING_URL, text="<html>oops</html>")

    with pytest.raises(LookupException) as exc_info:
        await geocoding_service.resolve_place(mock_http_client, "東京", mock_settings)

    assert exc_info.value.details["error_type"] == "parsing_error"


@pytest.mark.asyncio
async def test_resolve_place_sends_api_key(mock_http_client, mock_settings, mock_geocoding_response):
    settings = mock_settings.model_copy(update={"open_meteo_api_key": "secret-key"})
    mock_http_client.get.return_value = make_response(200, GEOCODING_URL, json=mock_geocoding_response)

    await geocoding_service.resolve_place(mock_http_client, "東京", settings)

    assert mock_http_client.get.call_args.kwargs["params"]["apikey"] == "secret-key"
