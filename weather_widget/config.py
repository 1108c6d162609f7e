from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent  # weather-widget/

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
OSM_TILE_URL = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
OSM_ATTRIBUTION = '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'


class Settings(BaseSettings):
    """Application settings with validation.

    Every field has a working default so the widget runs without any
    environment. Values can be overridden with WEATHER_WIDGET_* environment
    variables or a .env file.
    """

    # Server settings
    api_host: str = Field(default="127.0.0.1", min_length=1, description="Server host")
    api_port: int = Field(ge=1, le=65535, default=8000, description="Server port")
    log_level: str = Field(default="INFO", description="Root log level")

    # Upstream Open-Meteo endpoints
    geocoding_url: str = Field(default=GEOCODING_URL, pattern=r"^https?://", description="Geocoding search endpoint")
    forecast_url: str = Field(default=FORECAST_URL, pattern=r"^https?://", description="Forecast endpoint")
    open_meteo_api_key: str = Field(default="", description="Optional key for Open-Meteo commercial plans")
    geocoding_language: str = Field(default="ja", description="Language of geocoding results")
    timezone: str = Field(default="Asia/Tokyo", description="Timezone passed to the forecast API")
    http_timeout_seconds: float | None = Field(
        default=None, description="Upstream request timeout; None waits indefinitely"
    )

    # Widget defaults
    default_city: str = Field(default="東京", description="City looked up when a session first loads")
    default_latitude: float = Field(default=35.6895, ge=-90, le=90, description="Initial map center latitude")
    default_longitude: float = Field(default=139.6917, ge=-180, le=180, description="Initial map center longitude")

    # Map surface
    map_zoom: int = Field(default=10, ge=0, le=19, description="Fixed map zoom level")
    tile_url: str = Field(default=OSM_TILE_URL, description="XYZ tile URL template")
    tile_attribution: str = Field(default=OSM_ATTRIBUTION, description="Tile layer attribution HTML")

    # Orchestration
    discard_stale_responses: bool = Field(
        default=True, description="Ignore responses of lookups superseded by a newer one"
    )
    max_sessions: int = Field(default=500, ge=1, description="Widget sessions kept in memory")
    session_cookie_name: str = Field(default="weather_widget_session", min_length=1)

    # HTTP surface
    trusted_hosts: str = Field(default="*", description="Comma-separated trusted Host header patterns")
    cors_origin_regex: str = Field(
        default=r"http://(localhost|127\.0\.0\.1)(:\d+)?", description="Allowed CORS origins (regex)"
    )
    rate_limit: str = Field(default="60/minute", description="Per-IP limit for widget endpoints")

    model_config = SettingsConfigDict(
        env_prefix="WEATHER_WIDGET_",
        env_file=Path(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @field_validator("default_city", "geocoding_language", "timezone", mode="after")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Ensure text settings are not empty or whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("value must not be empty")
        return v

    @field_validator("tile_url", mode="after")
    @classmethod
    def validate_tile_url(cls, v: str) -> str:
        """Ensure the tile URL is an XYZ template."""
        missing = [part for part in ("{z}", "{x}", "{y}") if part not in v]
        if missing:
            raise ValueError(f"tile_url must contain {', '.join(missing)}")
        return v

    @field_validator("http_timeout_seconds", mode="after")
    @classmethod
    def validate_timeout(cls, v: float | None) -> float | None:
        """Reject non-positive timeouts."""
        if v is not None and v <= 0:
            raise ValueError("http_timeout_seconds must be positive")
        return v

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the log level name."""
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v}")
        return v

    @property
    def trusted_host_list(self) -> list[str]:
        """Trusted host patterns as a list."""
        return [host.strip() for host in self.trusted_hosts.split(",") if host.strip()]


# Singleton settings instance
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get singleton Settings instance for dependency injection.

    Example:
        @app.get("/")
        async def route(settings: Settings = Depends(get_settings)):
            return {"city": settings.default_city}
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
