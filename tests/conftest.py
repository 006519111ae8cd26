import httpx
import pytest
from fastapi.testclient import TestClient

from src.dependencies import TenancyContainer, build_tenancy_container
from src.main import create_app
from src.shared.config import Settings
from src.shared.infrastructure.observability.metrics import MetricsCollector
from src.tenancy.infrastructure.analytics.analytics_client import AnalyticsClient
from tests.helpers import BOOKS, FakeClock, InMemoryDomainRepository


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def metrics() -> MetricsCollector:
    return MetricsCollector(enabled=True)


@pytest.fixture
def settings() -> Settings:
    return Settings(environment="local", enhanced_domains_flag=True)


@pytest.fixture
def repository() -> InMemoryDomainRepository:
    return InMemoryDomainRepository(BOOKS)


@pytest.fixture
def tracked_visits() -> list:
    return []


@pytest.fixture
def analytics(tracked_visits) -> AnalyticsClient:
    def handler(request: httpx.Request) -> httpx.Response:
        tracked_visits.append(request)
        return httpx.Response(200, json={"ok": True})

    return AnalyticsClient(
        "http://analytics.test/api/analytics/track",
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


@pytest.fixture
def tenancy(settings, repository, analytics, clock, metrics) -> TenancyContainer:
    return build_tenancy_container(
        settings,
        repository=repository,
        analytics=analytics,
        clock=clock,
        metrics=metrics,
    )


@pytest.fixture
def app(settings, tenancy):
    return create_app(settings, tenancy)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
