"""Token domain models and value objects."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import StrEnum
from typing import Any, Optional


class TokenPurpose(StrEnum):
    """Why a token was issued. Only the email wording depends on it."""

    REGISTRATION = "registration"
    RECOVERY = "recovery"

    @classmethod
    def parse(cls, value: Any) -> Optional["TokenPurpose"]:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class TokenRecord:
    """The outstanding token for one email address."""

    token: str
    purpose: TokenPurpose
    created_at: datetime
    expires_at: datetime

    @classmethod
    def issue(
        cls, token: str, purpose: TokenPurpose, now: datetime, ttl: timedelta
    ) -> "TokenRecord":
        return cls(token=token, purpose=purpose, created_at=now, expires_at=now + ttl)

    def is_expired(self, now: datetime) -> bool:
        # a token is still valid at exactly expires_at
        return now > self.expires_at


@dataclass(slots=True)
class IssuedToken:
    """Result of a successful issuance returned to callers."""

    token: str
    purpose: TokenPurpose
    timestamp: datetime
    message_id: Optional[str] = None
