"""Custom exceptions for the weather widget with proper HTTP status codes."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error responses."""

    # Generic errors
    WIDGET_ERROR = "WIDGET_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Lookup errors
    LOOKUP_FAILED = "LOOKUP_FAILED"
    GEOCODING_UNAVAILABLE = "GEOCODING_UNAVAILABLE"
    PLACE_NOT_FOUND = "PLACE_NOT_FOUND"
    WEATHER_UNAVAILABLE = "WEATHER_UNAVAILABLE"


class WidgetException(Exception):
    """Base exception for widget errors with HTTP status code support.

    ``message`` is the localized text shown to the user; ``details`` carries
    structured context for logs and JSON error bodies.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.WIDGET_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        """Initialize widget exception.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            status_code: HTTP status code (default 500)
            details: Additional error context/details
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class InvalidPlaceNameException(WidgetException):
    """Place name is empty after trimming whitespace."""

    def __init__(self, message: str = "都市名を入力してください", details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.VALIDATION_ERROR,
            status_code=422,
            details=details,
        )


class LookupException(WidgetException):
    """Lookup failed for a reason other than an upstream status (network, unreadable body)."""

    def __init__(
        self,
        message: str = "天気データの取得に失敗しました。",
        code: ErrorCode = ErrorCode.LOOKUP_FAILED,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)


class GeocodingUnavailableException(LookupException):
    """Geocoding API answered with a non-success status."""

    def __init__(self, upstream_status: int, details: dict[str, Any] | None = None):
        self.upstream_status = upstream_status
        super().__init__(
            f"位置情報の取得エラー! ステータス: {upstream_status}",
            code=ErrorCode.GEOCODING_UNAVAILABLE,
            status_code=502,
            details={"upstream_status": upstream_status, **(details or {})},
        )


class PlaceNotFoundException(LookupException):
    """Geocoding API returned no candidates."""

    def __init__(self, place: str, details: dict[str, Any] | None = None):
        self.place = place
        super().__init__(
            "都市が見つかりません",
            code=ErrorCode.PLACE_NOT_FOUND,
            status_code=404,
            details={"place": place, **(details or {})},
        )


class WeatherUnavailableException(LookupException):
    """Forecast API answered with a non-success status."""

    def __init__(self, upstream_status: int, details: dict[str, Any] | None = None):
        self.upstream_status = upstream_status
        super().__init__(
            f"天気情報の取得エラー! ステータス: {upstream_status}",
            code=ErrorCode.WEATHER_UNAVAILABLE,
            status_code=502,
            details={"upstream_status": upstream_status, **(details or {})},
        )
