"""Repository protocols for data access layer abstraction."""

from .token import TokenRepository

__all__ = [
    "TokenRepository",
]
