"""Routers package public exports."""

__all__ = [
    "diagnostics",
    "health",
    "tokens",
]
