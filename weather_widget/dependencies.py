"""FastAPI dependencies for dependency injection."""

import secrets

import httpx
from fastapi import Depends, Request, Response

from weather_widget.config import Settings, get_settings
from weather_widget.services.lookup_service import LookupController
from weather_widget.state_managers import WidgetSessionManager


async def get_http_client(request: Request) -> httpx.AsyncClient:
    """
    Get the shared HTTP client from app state.

    Raises:
        RuntimeError: If HTTP client is not initialized.
    """
    client: httpx.AsyncClient | None = getattr(request.app.state, "http_client", None)

    if client is None:
        raise RuntimeError("HTTP client not initialized. This should never happen.")

    return client


async def get_session_manager(request: Request) -> WidgetSessionManager:
    """
    Get the widget session manager from app state.

    Raises:
        RuntimeError: If the session manager is not initialized.
    """
    manager: WidgetSessionManager | None = getattr(request.app.state, "session_manager", None)

    if manager is None:
        raise RuntimeError("Session manager not initialized.")

    return manager


def new_session_id() -> str:
    return secrets.token_urlsafe(16)


async def get_session_id(request: Request, settings: Settings = Depends(get_settings)) -> str:
    """Session id from the cookie, or a fresh one marked for set_session_cookie()."""
    session_id = request.cookies.get(settings.session_cookie_name)
    if not session_id:
        session_id = new_session_id()
        request.state.new_session_id = session_id
    return session_id


async def get_widget_controller(
    session_id: str = Depends(get_session_id),
    manager: WidgetSessionManager = Depends(get_session_manager),
    settings: Settings = Depends(get_settings),
) -> LookupController:
    """Get the calling session's lookup controller."""
    return await manager.get_or_create(session_id, settings)


def set_session_cookie(request: Request, response: Response, settings: Settings) -> Response:
    """Attach the session cookie if get_session_id() had to create one."""
    session_id = getattr(request.state, "new_session_id", None)
    if session_id:
        response.set_cookie(
            settings.session_cookie_name,
            session_id,
            httponly=True,
            samesite="lax",
        )
    return response
