"""Weather code classification (Open-Meteo / WMO codes)."""

from enum import Enum
from types import MappingProxyType

WEATHER_CODE_LABELS: MappingProxyType[int, str] = MappingProxyType(
    {
        0: "快晴",
        1: "ほぼ晴れ",
        2: "一部曇り",
        3: "曇り",
        45: "霧",
        48: "霧氷",
        51: "軽い霧雨",
        53: "霧雨",
        55: "強い霧雨",
        61: "小雨",
        63: "雨",
        65: "大雨",
        71: "小雪",
        73: "雪",
        75: "大雪",
        95: "雷雨",
    }
)


class IconCategory(str, Enum):
    """Icon shown on the weather card."""

    CLEAR = "clear"
    CLOUDY = "cloudy"
    RAINY = "rainy"
    OTHER = "other"


# Inclusive (low, high) code ranges, checked in order
_ICON_RANGES: tuple[tuple[int, int, IconCategory], ...] = (
    (0, 1, IconCategory.CLEAR),
    (2, 48, IconCategory.CLOUDY),
    (51, 67, IconCategory.RAINY),
)


def describe(code: int | None) -> str:
    """Return the label for a weather code, or an empty string for unknown codes."""
    if code is None:
        return ""
    return WEATHER_CODE_LABELS.get(code, "")


def icon_category(code: int | None) -> IconCategory:
    """Map a weather code to its icon category.

    Clear for 0-1, Cloudy for 2-48, Rainy for 51-67, Other for everything
    else (including a missing code).
    """
    if code is None:
        return IconCategory.OTHER
    for low, high, category in _ICON_RANGES:
        if low <= code <= high:
            return category
    return IconCategory.OTHER
