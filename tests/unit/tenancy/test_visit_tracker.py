import asyncio
import json

import httpx
import pytest
import respx

from src.tenancy.application.options import TenancyOptions
from src.tenancy.application.services.visit_tracker import VisitTracker
from src.tenancy.infrastructure.analytics.analytics_client import AnalyticsClient

TRACK_URL = "http://analytics.test/api/analytics/track"
ENABLED = TenancyOptions(enhanced_domains_enabled=True)


class SlowSink:
    def __init__(self):
        self.release = asyncio.Event()
        self.sent = []

    async def send_visit(self, domain_id: int) -> None:
        await self.release.wait()
        self.sent.append(domain_id)


@pytest.mark.asyncio
@respx.mock
async def test_track_visit_posts_payload():
    route = respx.post(TRACK_URL).mock(return_value=httpx.Response(204))
    client = AnalyticsClient(TRACK_URL)
    tracker = VisitTracker(client, ENABLED)

    assert tracker.track_visit(7) is not None
    await tracker.drain()
    await client.close()

    assert route.call_count == 1
    assert json.loads(route.calls.last.request.content) == {"domainId": 7, "type": "visit"}


@pytest.mark.asyncio
async def test_track_visit_does_not_wait_for_dispatch():
    sink = SlowSink()
    tracker = VisitTracker(sink, ENABLED)

    tracker.track_visit(3)

    assert tracker.pending == 1
    assert sink.sent == []
    sink.release.set()
    await tracker.drain()
    assert sink.sent == [3]
    assert tracker.pending == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("domain_id", [0, -1])
async def test_non_positive_ids_are_ignored(domain_id):
    sink = SlowSink()
    tracker = VisitTracker(sink, ENABLED)

    assert tracker.track_visit(domain_id) is None
    assert tracker.pending == 0


@pytest.mark.asyncio
async def test_disabled_enhanced_domains_skip_tracking():
    sink = SlowSink()
    tracker = VisitTracker(sink, TenancyOptions(enhanced_domains_enabled=False))

    assert tracker.track_visit(5) is None


@pytest.mark.asyncio
@respx.mock
async def test_dispatch_failures_are_counted_not_raised(metrics):
    respx.post(TRACK_URL).mock(side_effect=httpx.ConnectError("refused"))
    client = AnalyticsClient(TRACK_URL)
    tracker = VisitTracker(client, ENABLED, metrics=metrics)

    tracker.track_visit(1)
    tracker.track_visit(2)
    await tracker.drain()
    await client.close()

    assert metrics.get_counter("domain_visit_dispatch_failures_total") == 2


@pytest.mark.asyncio
@respx.mock
async def test_error_status_counts_as_failure(metrics):
    respx.post(TRACK_URL).mock(return_value=httpx.Response(500))
    client = AnalyticsClient(TRACK_URL)
    tracker = VisitTracker(client, ENABLED, metrics=metrics)

    tracker.track_visit(1)
    await tracker.drain()
    await client.close()

    assert metrics.get_counter("domain_visit_dispatch_failures_total") == 1
