"""Repository adapters package: explicit public exports."""

from .token_store import InMemoryTokenStore

__all__ = ["InMemoryTokenStore"]
