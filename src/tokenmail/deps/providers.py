"""Singleton providers for application-wide services and clients.

Runtime clients live on ``app.state`` (set by ``wiring.create_app``); these
providers read them from the request and fall back to lazily created module
singletons when a route runs outside a wired app.
"""

from typing import Any

from fastapi import Request

from ..config import Settings
from ..infrastructure.clock import SystemClock
from ..infrastructure.email.mock import MockEmailSender
from ..infrastructure.repositories.token_store import InMemoryTokenStore
from ..ports.clock import Clock
from ..ports.email import EmailSender

# Lazy singletons to avoid import-time side-effects
_settings: Settings | None = None
_token_store: InMemoryTokenStore | None = None
_email_sender: Any = None


def _state_attr(request: Request | None, name: str) -> Any:
    if request is None:
        return None
    return getattr(request.app.state, name, None)


def get_settings(request: Request = None) -> Settings:  # type: ignore[assignment]
    """Get the app's Settings, or a lazily created singleton outside a request."""
    global _settings
    settings = _state_attr(request, "settings")
    if settings is not None:
        return settings  # type: ignore[no-any-return]
    if _settings is None:
        _settings = Settings()
    return _settings


def get_clock(request: Request = None) -> Clock:  # type: ignore[assignment]
    clock = _state_attr(request, "clock")
    if clock is not None:
        return clock  # type: ignore[no-any-return]
    return SystemClock()


def get_token_store(request: Request = None) -> InMemoryTokenStore:  # type: ignore[assignment]
    """Get token store: prefer the app-initialized store, fallback to a process singleton."""
    global _token_store
    store = _state_attr(request, "token_store")
    if store is not None:
        return store  # type: ignore[no-any-return]
    if _token_store is None:
        _token_store = InMemoryTokenStore()
    return _token_store


def get_email_sender(request: Request = None) -> EmailSender:  # type: ignore[assignment]
    """Get email sender: prefer app-initialized sender, fallback to Mock."""
    global _email_sender
    sender = _state_attr(request, "email_sender")
    if sender is not None:
        return sender  # type: ignore[no-any-return]
    if _email_sender is None:
        _email_sender = MockEmailSender()
    return _email_sender  # type: ignore[no-any-return]
