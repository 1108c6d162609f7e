"""State managers for handling application-wide mutable state.

State managers guard their data with asyncio.Lock and share the
initialize/cleanup lifecycle of the StateManager ABC.
"""

import asyncio
from abc import ABC, abstractmethod
from collections import OrderedDict

from weather_widget.config import Settings
from weather_widget.logging_config import get_logger, log_with_context
from weather_widget.services.lookup_service import LookupController

logger = get_logger(__name__)


class StateManager(ABC):
    """Base class for all state managers."""

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the state manager (called during app startup)."""
        pass

    @abstractmethod
    async def cleanup(self) -> None:
        """Cleanup resources (called during app shutdown)."""
        pass


class WidgetSessionManager(StateManager):
    """Keeps one LookupController per browser session.

    Sessions live only in memory. When more than ``max_sessions`` are open
    the least recently used one is dropped.
    """

    def __init__(self, max_sessions: int = 500):
        """Initialize the session manager."""
        self._sessions: OrderedDict[str, LookupController] = OrderedDict()
        self._max_sessions = max_sessions
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        """Initialize the session manager."""
        # Nothing to load, sessions start empty
        pass

    async def cleanup(self) -> None:
        """Drop all sessions."""
        async with self._lock:
            self._sessions.clear()

    async def get_or_create(self, session_id: str, settings: Settings) -> LookupController:
        """Get the controller for a session, creating it on first use.

        Args:
            session_id: Value of the session cookie
            settings: Settings used for a new session's initial state

        Returns:
            The session's LookupController
        """
        async with self._lock:
            controller = self._sessions.get(session_id)
            if controller is not None:
                self._sessions.move_to_end(session_id)
                return controller

            controller = LookupController(settings, session_id=session_id)
            self._sessions[session_id] = controller
            while len(self._sessions) > self._max_sessions:
                evicted_id, _ = self._sessions.popitem(last=False)
                log_with_context(
                    logger,
                    "info",
                    "Evicted least recently used session",
                    session_id=evicted_id,
                    event_type="session_evicted",
                )
            return controller

    async def get(self, session_id: str) -> LookupController | None:
        """Get an existing session's controller without creating one."""
        async with self._lock:
            return self._sessions.get(session_id)

    async def session_count(self) -> int:
        """Number of sessions currently held."""
        async with self._lock:
            return len(self._sessions)
