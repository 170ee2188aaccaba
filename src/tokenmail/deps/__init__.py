"""Dependency injection for FastAPI.

This package provides all FastAPI dependency functions organized by responsibility:
- providers: Singleton providers (settings, clock, token store, email sender)
- injection: Service dependency injection
"""

from .injection import get_token_service
from .providers import (
    get_clock,
    get_email_sender,
    get_settings,
    get_token_store,
)

__all__ = [
    # Providers
    "get_settings",
    "get_clock",
    "get_email_sender",
    "get_token_store",
    # Injection
    "get_token_service",
]
