import asyncio
import logging
from datetime import datetime, timedelta
from typing import Optional

from printrelay.models import utcnow
from printrelay.services.job_store import JobStore

logger = logging.getLogger(__name__)


class ExpirySweeper:
    """
    Periodically drops jobs older than the TTL, whatever their status.
    A job still being printed by a slow agent is dropped too.
    """

    def __init__(self, store: JobStore, ttl_seconds: float = 30 * 60, interval_seconds: float = 60):
        self.store = store
        self.ttl = timedelta(seconds=ttl_seconds)
        self.interval = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def sweep_once(self, now: Optional[datetime] = None) -> int:
        now = now or utcnow()
        removed = await self.store.delete_expired(now - self.ttl)
        if removed:
            logger.info("Expired %d job(s): %s", len(removed), ", ".join(removed))
        return len(removed)

    async def _run_loop(self):
        logger.info("Sweeper started, ttl=%ss interval=%ss", self.ttl.total_seconds(), self.interval)
        while True:
            await asyncio.sleep(self.interval)
            try:
                await self.sweep_once()
            except Exception:
                logger.exception("Sweep failed")

    def start(self):
        if not self.running:
            self._task = asyncio.get_running_loop().create_task(self._run_loop())

    async def stop(self):
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Sweeper stopped")
