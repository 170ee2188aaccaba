from datetime import datetime
from typing import Optional, Protocol

from ...domain.token import TokenRecord


class TokenRepository(Protocol):
    """Protocol for the email -> token record store."""

    async def put(self, email: str, record: TokenRecord) -> None: ...

    async def get(self, email: str, now: datetime) -> Optional[TokenRecord]: ...

    async def sweep(self, now: datetime) -> int: ...
