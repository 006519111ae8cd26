from __future__ import annotations

import asyncio
from typing import Optional, Protocol, Set

from src.shared.infrastructure.observability.metrics import MetricsCollector, get_metrics
from src.shared.logging import get_logger
from src.tenancy.application.options import TenancyOptions

logger = get_logger(__name__)


class VisitSink(Protocol):
    async def send_visit(self, domain_id: int) -> None: ...


class VisitTracker:
    """
    Non-blocking visit analytics.

    track_visit() schedules the dispatch and returns at once; failures end up
    in logs and the `domain_visit_dispatch_failures_total` counter only.
    """

    def __init__(
        self,
        sink: VisitSink,
        options: TenancyOptions,
        *,
        metrics: Optional[MetricsCollector] = None,
    ) -> None:
        self._sink = sink
        self._options = options
        self._metrics = metrics or get_metrics()
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def track_visit(self, domain_id: int) -> Optional[asyncio.Task]:
        if not self._options.enhanced_domains_enabled or domain_id <= 0:
            return None

        task = asyncio.create_task(self._dispatch(domain_id))
        # Keep a strong ref until done
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _dispatch(self, domain_id: int) -> None:
        try:
            await self._sink.send_visit(domain_id)
        except Exception as e:
            self._metrics.increment_counter("domain_visit_dispatch_failures_total")
            logger.warning("Visit tracking failed", domain_id=domain_id, error=str(e))

    async def drain(self) -> None:
        """Wait for every in-flight dispatch to finish."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
