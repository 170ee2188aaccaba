"""In-memory store for outstanding email tokens.

Holds at most one record per email address. Records live only as long as the
process; nothing is persisted.
"""

import asyncio
import time
from datetime import datetime
from typing import Optional

from ...domain.token import TokenRecord
from ...logging_config import get_logger

logger = get_logger(__name__)


def _record_store_size(size: int) -> None:
    """Publish the store size (lazy import to avoid circular dependency)."""
    try:
        from ...metrics import TOKEN_STORE_SIZE

        if TOKEN_STORE_SIZE is not None:
            TOKEN_STORE_SIZE.set(size)
    except Exception as e:
        # metrics must never break store operations
        logger.debug("token_store_size_metric_failed", error=str(e))


class InMemoryTokenStore:
    """Maps email address -> latest TokenRecord behind an asyncio lock.

    ``put``, ``get`` and ``sweep`` each hold the lock for their whole body so a
    commit, a lookup that evicts and a sweep pass never interleave.
    """

    def __init__(self):
        self.store: dict[str, TokenRecord] = {}
        self.lock = asyncio.Lock()

    async def put(self, email: str, record: TokenRecord) -> None:
        """Store ``record`` for ``email``, replacing any previous record."""
        async with self.lock:
            self.store[email] = record
            size = len(self.store)
        _record_store_size(size)

    async def get(self, email: str, now: datetime) -> Optional[TokenRecord]:
        """Return the record for ``email`` or None.

        An expired record is removed before the lock is released and still
        returned, so the caller can report the expiry instead of a miss.
        """
        async with self.lock:
            record = self.store.get(email)
            if record is None:
                return None
            if record.is_expired(now):
                del self.store[email]
                size = len(self.store)
            else:
                return record
        _record_store_size(size)
        return record

    async def sweep(self, now: datetime) -> int:
        """Remove every expired record. Returns how many were removed."""
        start = time.time()
        async with self.lock:
            expired = [email for email, record in self.store.items() if record.is_expired(now)]
            for email in expired:
                del self.store[email]
                logger.info("token_swept", email=email)
            size = len(self.store)
        _record_store_size(size)
        logger.debug(
            "token_store_sweep",
            removed=len(expired),
            remaining=size,
            duration=time.time() - start,
        )
        return len(expired)
