"""Pydantic models for weather data."""

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from weather_widget.advice import clothing_advice
from weather_widget.conditions import IconCategory, describe, icon_category
from weather_widget.models.location import Location

CURRENT_FIELDS = ("temperature_2m", "relative_humidity_2m", "weather_code", "wind_speed_10m")


def _lenient_float(v: Any) -> float | None:
    """Coerce to float, or None when the upstream value is missing or malformed."""
    if v is None or isinstance(v, bool):
        return None
    try:
        return float(v)
    except (TypeError, ValueError, OverflowError):
        return None


class CurrentConditions(BaseModel):
    """Current conditions from the forecast API ``current`` block.

    Fields the upstream schema omits (or sends in a shape we can't read) are
    None; the card renders them blank.
    """

    model_config = ConfigDict(populate_by_name=True)

    temperature_c: float | None = Field(default=None, validation_alias="temperature_2m")
    relative_humidity_pct: float | None = Field(default=None, validation_alias="relative_humidity_2m")
    weather_code: int | None = None
    wind_speed_kmh: float | None = Field(default=None, validation_alias="wind_speed_10m")

    @field_validator("temperature_c", "relative_humidity_pct", "wind_speed_kmh", mode="before")
    @classmethod
    def lenient_float(cls, v: Any) -> float | None:
        value = _lenient_float(v)
        if value is not None and not math.isfinite(value):
            return None
        return value

    @field_validator("weather_code", mode="before")
    @classmethod
    def lenient_code(cls, v: Any) -> int | None:
        value = _lenient_float(v)
        if value is None or not value.is_integer():
            return None
        return int(value)


class ForecastResponse(BaseModel):
    """Raw Open-Meteo forecast response (only the part we request)."""

    current: CurrentConditions = Field(default_factory=CurrentConditions)

    @field_validator("current", mode="before")
    @classmethod
    def missing_block(cls, v: Any) -> Any:
        return v if isinstance(v, dict) else {}


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (-2.5 -> -2, 2.5 -> 3)."""
    return math.floor(value + 0.5)


def _format_number(value: float | None) -> str:
    if value is None:
        return ""
    return str(int(value)) if value.is_integer() else str(value)


class WeatherCard(BaseModel):
    """Presentation-ready weather card for templates and JSON clients."""

    temperature: str
    description: str
    icon: IconCategory
    humidity: str
    wind_speed: str
    advice: str

    @classmethod
    def from_conditions(cls, conditions: CurrentConditions) -> "WeatherCard":
        """Create a WeatherCard from parsed current conditions.

        Args:
            conditions: Parsed CurrentConditions

        Returns:
            WeatherCard with blank strings where a value is absent
        """
        temp = conditions.temperature_c
        return cls(
            temperature=str(round_half_up(temp)) if temp is not None else "",
            description=describe(conditions.weather_code),
            icon=icon_category(conditions.weather_code),
            humidity=_format_number(conditions.relative_humidity_pct),
            wind_speed=_format_number(conditions.wind_speed_kmh),
            advice=clothing_advice(temp) if temp is not None else "",
        )


class LookupResult(BaseModel):
    """JSON response of a single stateless lookup."""

    location: Location
    conditions: CurrentConditions
    card: WeatherCard
