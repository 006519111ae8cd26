"""
Periodic sweep of the in-process cache tier.
"""
from __future__ import annotations

import asyncio
import time
from typing import Optional

from src.shared.infrastructure.cache.memory_cache import MemoryTTLCache
from src.shared.infrastructure.observability.metrics import MetricsCollector, get_metrics
from src.shared.logging import get_logger

logger = get_logger(__name__)


class CacheSweepWorker:
    """Background task that drops expired memory-cache entries every `interval` seconds."""

    def __init__(
        self,
        cache: MemoryTTLCache,
        interval: float = 300,
        metrics: Optional[MetricsCollector] = None,
    ) -> None:
        self.worker_name = "cache_sweep"
        self.cache = cache
        self.interval = interval
        self.metrics = metrics or get_metrics()
        self.shutdown_event = asyncio.Event()
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.is_running:
            return
        self.shutdown_event.clear()
        self._task = asyncio.create_task(self.run(), name=self.worker_name)

    async def stop(self) -> None:
        """Graceful shutdown of worker."""
        self.shutdown_event.set()
        if self._task is not None:
            await self._task
            self._task = None
        logger.info("Worker shutting down", worker=self.worker_name)

    def execute(self) -> int:
        removed = self.cache.sweep()
        if removed:
            self.metrics.increment_counter("domain_cache_swept_total", removed)
        self.metrics.set_gauge("domain_cache_entries", len(self.cache))
        return removed

    async def run(self) -> None:
        """Main worker loop."""
        logger.info("Worker started", worker=self.worker_name, interval=self.interval)

        while not self.shutdown_event.is_set():
            try:
                # Wait for next interval, but wake immediately on shutdown
                await asyncio.wait_for(self.shutdown_event.wait(), timeout=self.interval)
                break
            except asyncio.TimeoutError:
                pass

            start_time = time.perf_counter()
            removed = self.execute()
            logger.debug(
                "Cache sweep completed",
                removed=removed,
                remaining=len(self.cache),
                duration=time.perf_counter() - start_time,
            )

        logger.info("Worker stopped", worker=self.worker_name)
