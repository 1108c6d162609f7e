"""Pytest configuration and shared fixtures."""

from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi.testclient import TestClient

from weather_widget.config import Settings
from weather_widget.core.middleware import limiter
from weather_widget.dependencies import get_http_client
from weather_widget.main import app as fastapi_app

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"

TOKYO = {"id": 1850147, "name": "東京", "latitude": 35.6895, "longitude": 139.69171, "country": "日本"}
OSAKA = {"id": 1853909, "name": "大阪市", "latitude": 34.69374, "longitude": 135.50218, "country": "日本"}


def make_response(status_code: int, url: str, json=None, text: str | None = None) -> httpx.Response:
    """Build a real httpx.Response bound to a request so raise_for_status() works."""
    request = httpx.Request("GET", url)
    if json is not None:
        return httpx.Response(status_code, json=json, request=request)
    return httpx.Response(status_code, text=text or "", request=request)


class FakeOpenMeteo:
    """In-memory stand-in for the Open-Meteo geocoding and forecast APIs."""

    def __init__(self):
        self.places: dict[str, dict] = {"東京": TOKYO, "大阪": OSAKA}
        self.current: dict = {
            "time": "2024-05-01T12:00",
            "interval": 900,
            "temperature_2m": 18.4,
            "relative_humidity_2m": 62,
            "weather_code": 2,
            "wind_speed_10m": 11.2,
        }
        self.geocoding_status = 200
        self.forecast_status = 200
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "geocoding-api.open-meteo.com":
            if self.geocoding_status != 200:
                return httpx.Response(self.geocoding_status, text="geocoding unavailable")
            place = self.places.get(request.url.params.get("name", ""))
            if place is None:
                return httpx.Response(200, json={"generationtime_ms": 0.4})
            return httpx.Response(200, json={"results": [place], "generationtime_ms": 0.4})
        if request.url.host == "api.open-meteo.com":
            if self.forecast_status != 200:
                return httpx.Response(self.forecast_status, text="forecast unavailable")
            return httpx.Response(
                200,
                json={
                    "latitude": float(request.url.params["latitude"]),
                    "longitude": float(request.url.params["longitude"]),
                    "timezone": request.url.params.get("timezone"),
                    "current": self.current,
                },
            )
        return httpx.Response(404, text="unknown host")

    def hosts(self) -> list[str]:
        return [r.url.host for r in self.requests]


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    """Start every test with empty rate limit counters."""
    limiter.reset()
    yield


@pytest.fixture
def fake_open_meteo():
    """Fake upstream APIs."""
    return FakeOpenMeteo()


@pytest.fixture
def fake_http_client(fake_open_meteo):
    """AsyncClient routed to the fake upstream APIs."""
    return httpx.AsyncClient(transport=httpx.MockTransport(fake_open_meteo.handler))


@pytest.fixture
def test_client(fake_http_client):
    """FastAPI test client with lifespan context and upstream calls faked."""
    fastapi_app.dependency_overrides[get_http_client] = lambda: fake_http_client
    with TestClient(fastapi_app) as client:
        yield client
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def mock_http_client():
    """Mock httpx.AsyncClient for external API calls."""
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get = AsyncMock()
    mock_client.aclose = AsyncMock()
    return mock_client


@pytest.fixture
def mock_settings():
    """Settings instance with test values."""
    return Settings(
        api_host="127.0.0.1",
        api_port=8000,
        geocoding_url=GEOCODING_URL,
        forecast_url=FORECAST_URL,
        geocoding_language="ja",
        timezone="Asia/Tokyo",
        default_city="東京",
        default_latitude=35.6895,
        default_longitude=139.6917,
    )


@pytest.fixture
def mock_geocoding_response():
    """Open-Meteo geocoding response with two candidates."""
    return {
        "results": [
            TOKYO,
            {"id": 1, "name": "東京都", "latitude": 35.68, "longitude": 139.76, "country": "日本"},
        ],
        "generationtime_ms": 0.8,
    }


@pytest.fixture
def mock_forecast_response():
    """Open-Meteo forecast response with a full current block."""
    return {
        "latitude": 35.7,
        "longitude": 139.6875,
        "timezone": "Asia/Tokyo",
        "current_units": {
            "temperature_2m": "°C",
            "relative_humidity_2m": "%",
            "weather_code": "wmo code",
            "wind_speed_10m": "km/h",
        },
        "current": {
            "time": "2024-05-01T12:00",
            "interval": 900,
            "temperature_2m": 21.6,
            "relative_humidity_2m": 55,
            "weather_code": 0,
            "wind_speed_10m": 7.9,
        },
    }
