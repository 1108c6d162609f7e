"""Lookup orchestration: the per-session Idle -> Loading -> Success/Failure cycle."""

import asyncio

import httpx

from weather_widget.config import Settings
from weather_widget.exceptions import ErrorCode, WidgetException
from weather_widget.logging_config import get_logger, log_with_context
from weather_widget.map_surface import clicked_location, default_center
from weather_widget.models.location import Coordinates, Location
from weather_widget.models.weather import CurrentConditions
from weather_widget.models.widget_state import LookupPhase, WidgetState
from weather_widget.services import geocoding_service, weather_service

logger = get_logger(__name__)

GENERIC_ERROR_MESSAGE = "天気データの取得に失敗しました。"


def to_user_message(exc: Exception) -> str:
    """Convert any lookup failure into the single string shown in place of the card.

    Known kinds show ``エラー: {message}``. Transport failures and unreadable
    bodies (``LookupException``) show the generic message on purpose, without
    the underlying network error text.
    """
    if isinstance(exc, WidgetException) and exc.code is not ErrorCode.LOOKUP_FAILED:
        return f"エラー: {exc.message}"
    return GENERIC_ERROR_MESSAGE


class LookupController:
    """Owns one session's WidgetState and runs lookups against it.

    Every dispatch takes a sequence token. With ``discard_stale_responses``
    on, a response is applied only when its token is still the latest one
    dispatched, so an older lookup that settles late can't overwrite a newer
    one. With it off, whichever response settles last wins.
    """

    def __init__(self, settings: Settings, session_id: str = ""):
        self.session_id = session_id
        self._discard_stale = settings.discard_stale_responses
        self._state = WidgetState(label=settings.default_city, map_center=default_center(settings))
        self._latest_token = 0
        self._mounted = False
        self._lock = asyncio.Lock()

    @property
    def mounted(self) -> bool:
        return self._mounted

    async def snapshot(self) -> WidgetState:
        """Copy of the current state."""
        async with self._lock:
            return self._state.model_copy(deep=True)

    async def ensure_mounted(self, client: httpx.AsyncClient, settings: Settings) -> WidgetState:
        """Run the initial lookup once per session, otherwise return the current state."""
        if self._mounted:
            return await self.snapshot()
        return await self.mount(client, settings)

    async def mount(self, client: httpx.AsyncClient, settings: Settings) -> WidgetState:
        """Initial lookup of the configured default city."""
        self._mounted = True
        return await self.search(client, settings, settings.default_city)

    async def search(self, client: httpx.AsyncClient, settings: Settings, name: str) -> WidgetState:
        """Form submission: geocode ``name`` then fetch conditions there.

        On success the map is moved to the resolved place.
        """
        token = await self._dispatch(label=name)
        try:
            location = await geocoding_service.resolve_place(client, name, settings)
            conditions = await weather_service.fetch_conditions(
                client, location.latitude, location.longitude, settings
            )
        except Exception as e:
            return await self._fail(token, e)
        return await self._succeed(token, location, conditions, recenter=True)

    async def select_point(
        self,
        client: httpx.AsyncClient,
        settings: Settings,
        latitude: float,
        longitude: float,
    ) -> WidgetState:
        """Map click: fetch conditions for the clicked point, skipping geocoding.

        The map is left where the user put it.
        """
        token = await self._dispatch()
        location = clicked_location(latitude, longitude)
        try:
            conditions = await weather_service.fetch_conditions(client, latitude, longitude, settings)
        except Exception as e:
            return await self._fail(token, e)
        return await self._succeed(token, location, conditions, recenter=False)

    async def _dispatch(self, label: str | None = None) -> int:
        async with self._lock:
            self._mounted = True
            self._latest_token += 1
            if label is not None:
                self._state.label = label
            self._state.loading = True
            self._state.error = None
            self._state.phase = LookupPhase.LOADING
            log_with_context(
                logger,
                "debug",
                "Lookup dispatched",
                session_id=self.session_id,
                token=self._latest_token,
                event_type="lookup_dispatched",
            )
            return self._latest_token

    def _is_stale(self, token: int) -> bool:
        if self._discard_stale and token != self._latest_token:
            log_with_context(
                logger,
                "info",
                "Discarding stale lookup response",
                session_id=self.session_id,
                token=token,
                latest_token=self._latest_token,
                event_type="lookup_stale",
            )
            return True
        return False

    async def _succeed(
        self,
        token: int,
        location: Location,
        conditions: CurrentConditions,
        recenter: bool,
    ) -> WidgetState:
        async with self._lock:
            if not self._is_stale(token):
                self._state.label = location.display_name
                self._state.conditions = conditions
                self._state.error = None
                self._state.loading = False
                self._state.phase = LookupPhase.SUCCESS
                self._state.recenter = recenter
                if recenter:
                    self._state.map_center = Coordinates(latitude=location.latitude, longitude=location.longitude)
                log_with_context(
                    logger,
                    "info",
                    "Lookup succeeded",
                    session_id=self.session_id,
                    token=token,
                    display_name=location.display_name,
                    event_type="lookup_success",
                )
            return self._state.model_copy(deep=True)

    async def _fail(self, token: int, exc: Exception) -> WidgetState:
        async with self._lock:
            if not self._is_stale(token):
                self._state.conditions = None
                self._state.error = to_user_message(exc)
                self._state.loading = False
                self._state.phase = LookupPhase.FAILURE
                self._state.recenter = False
                if isinstance(exc, WidgetException):
                    log_with_context(
                        logger,
                        "warning",
                        "Lookup failed",
                        session_id=self.session_id,
                        token=token,
                        error_code=exc.code.value,
                        error=exc.message,
                        details=exc.details,
                        event_type="lookup_failure",
                    )
                else:
                    log_with_context(
                        logger,
                        "error",
                        "Lookup failed unexpectedly",
                        session_id=self.session_id,
                        token=token,
                        error=str(exc),
                        error_type=type(exc).__name__,
                        event_type="lookup_error",
                    )
                    logger.error("Exception traceback:", exc_info=exc)
            return self._state.model_copy(deep=True)
