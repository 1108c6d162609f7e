"""Pydantic models for geocoding and locations."""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class Coordinates(BaseModel):
    """A latitude/longitude pair (not range-checked)."""

    latitude: float
    longitude: float


class Location(Coordinates):
    """A resolved place: coordinates plus the name shown on the card."""

    display_name: str


class GeocodingResult(BaseModel):
    """One candidate from the Open-Meteo geocoding API."""

    latitude: float
    longitude: float
    name: str | None = None
    country: str | None = None
    admin1: str | None = None


class GeocodingResponse(BaseModel):
    """Raw Open-Meteo geocoding response; ``results`` is absent when nothing matched."""

    results: list[GeocodingResult] = Field(default_factory=list)

    @field_validator("results", mode="before")
    @classmethod
    def null_results(cls, v: Any) -> Any:
        return [] if v is None else v
