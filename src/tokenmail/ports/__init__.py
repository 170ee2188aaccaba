"""Ports package - defines interfaces for external dependencies.

Exports repository protocols and service interfaces for dependency inversion.
"""

from .clock import Clock
from .email import EmailSender
from .repositories import TokenRepository

__all__ = [
    # Repository protocols
    "TokenRepository",
    # Collaborators
    "EmailSender",
    "Clock",
]
