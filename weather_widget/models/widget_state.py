"""Per-session UI state of the widget."""

from enum import Enum

from pydantic import BaseModel

from weather_widget.models.location import Coordinates
from weather_widget.models.weather import CurrentConditions, WeatherCard


class LookupPhase(str, Enum):
    """Where the session is in its lookup cycle."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILURE = "failure"


class WidgetState(BaseModel):
    """Everything the weather tile renders from.

    ``label`` doubles as the search field value, the way a single city field
    does in the page. ``recenter`` tells the client to move the map to
    ``map_center`` after the last applied update.
    """

    label: str
    map_center: Coordinates
    conditions: CurrentConditions | None = None
    loading: bool = False
    error: str | None = None
    phase: LookupPhase = LookupPhase.IDLE
    recenter: bool = False

    @property
    def card(self) -> WeatherCard | None:
        """Weather card for the current conditions, if any."""
        if self.conditions is None:
            return None
        return WeatherCard.from_conditions(self.conditions)
