"""Background removal of expired tokens."""

import asyncio
from typing import Optional

from ..logging_config import get_logger
from .email_token_service import EmailTokenService

logger = get_logger(__name__)


class TokenSweeper:
    """Runs ``EmailTokenService.sweep_expired`` on a fixed interval.

    Lookups enforce expiry on their own; the sweep only keeps addresses that
    are never looked up again from accumulating in memory.
    """

    def __init__(self, service: EmailTokenService, interval_seconds: float = 600):
        self.service = service
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> int:
        """Sweep one time. Failures are logged and reported as zero removals."""
        try:
            removed = await self.service.sweep_expired()
        except Exception as e:
            logger.exception("token_sweep_failed", error=str(e))
            return 0
        logger.info("token_sweep_completed", removed=removed)
        return removed

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            await self.run_once()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._loop())
        logger.info("token_sweeper_started", interval_seconds=self.interval_seconds)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("token_sweeper_stopped")
