"""Map surface: view model, click coordinates and labels."""

from pydantic import BaseModel

from weather_widget.config import Settings
from weather_widget.models.location import Coordinates, Location


class MapView(BaseModel):
    """What the page needs to draw the Leaflet map."""

    center: Coordinates
    zoom: int
    tile_url: str
    attribution: str

    @classmethod
    def from_settings(cls, settings: Settings, center: Coordinates | None = None) -> "MapView":
        """Build the map view, centered on ``center`` or the configured default."""
        return cls(
            center=center or default_center(settings),
            zoom=settings.map_zoom,
            tile_url=settings.tile_url,
            attribution=settings.tile_attribution,
        )


def default_center(settings: Settings) -> Coordinates:
    return Coordinates(latitude=settings.default_latitude, longitude=settings.default_longitude)


def coordinate_label(latitude: float, longitude: float) -> str:
    """Label shown for a clicked point, e.g. '緯度: 35.0000, 経度: 139.0000'."""
    return f"緯度: {latitude:.4f}, 経度: {longitude:.4f}"


def clicked_location(latitude: float, longitude: float) -> Location:
    """Location for a map click; coordinates pass through unclamped."""
    return Location(
        latitude=latitude,
        longitude=longitude,
        display_name=coordinate_label(latitude, longitude),
    )
