import asyncio

import pytest

from src.shared.infrastructure.cache.memory_cache import MemoryTTLCache
from src.shared.infrastructure.cache.sweeper import CacheSweepWorker
from tests.helpers import FakeClock


def test_execute_removes_only_expired(metrics):
    clock = FakeClock()
    cache = MemoryTTLCache(clock=clock)
    cache.set("old", 1, 10)
    cache.set("new", 2, 100)
    clock.advance(50)

    worker = CacheSweepWorker(cache, interval=300, metrics=metrics)

    assert worker.execute() == 1
    assert "old" not in cache and "new" in cache
    assert metrics.get_counter("domain_cache_swept_total") == 1
    assert metrics.get_metrics()["gauges"]["domain_cache_entries"] == 1


@pytest.mark.asyncio
async def test_background_loop_sweeps_and_stops(metrics):
    clock = FakeClock()
    cache = MemoryTTLCache(clock=clock)
    cache.set("k", "v", 1)
    clock.advance(2)

    worker = CacheSweepWorker(cache, interval=0.01, metrics=metrics)
    worker.start()
    assert worker.is_running

    for _ in range(100):
        if len(cache) == 0:
            break
        await asyncio.sleep(0.01)

    await worker.stop()
    assert len(cache) == 0
    assert not worker.is_running


@pytest.mark.asyncio
async def test_stop_wakes_a_long_interval_immediately(metrics):
    worker = CacheSweepWorker(MemoryTTLCache(clock=FakeClock()), interval=3600, metrics=metrics)
    worker.start()
    await asyncio.sleep(0)

    await asyncio.wait_for(worker.stop(), timeout=1)
    assert not worker.is_running
