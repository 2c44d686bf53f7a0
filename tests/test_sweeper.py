from __future__ import annotations

import asyncio
from datetime import timedelta

from printrelay.models import PROCESSING, Job, utcnow
from printrelay.services.job_store import MemoryJobStore
from printrelay.services.sweeper import ExpirySweeper


def test_sweep_once_removes_only_expired_jobs() -> None:
    async def scenario() -> None:
        store = MemoryJobStore()
        now = utcnow()
        stale = Job(printer_name="P1", payload="x", created_at=now - timedelta(minutes=30, seconds=1), status=PROCESSING)
        fresh = Job(printer_name="P1", payload="x", created_at=now - timedelta(minutes=29))
        await store.put(stale)
        await store.put(fresh)

        sweeper = ExpirySweeper(store, ttl_seconds=30 * 60)
        assert await sweeper.sweep_once(now=now) == 1
        assert await store.get(stale.id) is None
        assert await store.get(fresh.id) is not None

    asyncio.run(scenario())


def test_background_task_sweeps_and_stops() -> None:
    async def scenario() -> None:
        store = MemoryJobStore()
        await store.put(Job(printer_name="P1", payload="x", created_at=utcnow() - timedelta(seconds=5)))

        sweeper = ExpirySweeper(store, ttl_seconds=1, interval_seconds=0.01)
        sweeper.start()
        sweeper.start()  # second start is a no-op
        assert sweeper.running
        for _ in range(100):
            if await store.size() == 0:
                break
            await asyncio.sleep(0.01)
        assert await store.size() == 0

        await sweeper.stop()
        assert not sweeper.running

    asyncio.run(scenario())


def test_sweep_failure_does_not_end_the_loop() -> None:
    class FlakyStore(MemoryJobStore):
        calls = 0

        async def delete_expired(self, cutoff):
            FlakyStore.calls += 1
            if FlakyStore.calls == 1:
                raise RuntimeError("boom")
            return await super().delete_expired(cutoff)

    async def scenario() -> None:
        sweeper = ExpirySweeper(FlakyStore(), ttl_seconds=60, interval_seconds=0.01)
        sweeper.start()
        for _ in range(100):
            if FlakyStore.calls >= 2:
                break
            await asyncio.sleep(0.01)
        assert sweeper.running
        await sweeper.stop()
        assert FlakyStore.calls >= 2

    asyncio.run(scenario())
