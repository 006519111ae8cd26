# src/dependencies.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from src.shared.config import Settings
from src.shared.infrastructure.cache.cache_protocol import IRemoteStore
from src.shared.infrastructure.cache.memory_cache import Clock, MemoryTTLCache
from src.shared.infrastructure.cache.redis_cache import RedisStore
from src.shared.infrastructure.cache.rest_kv_store import RestKVStore
from src.shared.infrastructure.cache.sweeper import CacheSweepWorker
from src.shared.infrastructure.cache.tiered_cache import TieredCache
from src.shared.infrastructure.database.session import DatabaseSessionFactory
from src.shared.infrastructure.observability.metrics import MetricsCollector, get_metrics
from src.shared.logging import get_logger
from src.tenancy.application.options import TenancyOptions
from src.tenancy.application.services.tenant_config_resolver import TenantConfigResolver
from src.tenancy.application.services.visit_tracker import VisitTracker
from src.tenancy.domain.repositories.domain_repository import DomainRepository
from src.tenancy.infrastructure.analytics.analytics_client import AnalyticsClient
from src.tenancy.infrastructure.repositories.domain_repository_impl import SqlAlchemyDomainRepository

logger = get_logger(__name__)


def build_remote_store(settings: Settings) -> Optional[IRemoteStore]:
    """
    Remote tier selection:
      1) KV REST API (URL + token both set)
      2) Redis (REDIS_URL)
      3) none -> memory tier only
    """
    if settings.kv_rest_configured:
        return RestKVStore(settings.kv_rest_api_url or "", settings.kv_rest_api_token or "")
    if settings.redis_url:
        return RedisStore.from_url(settings.redis_url)
    return None


@dataclass
class TenancyContainer:
    """Process-wide tenancy collaborators, stored on app.state.tenancy."""
    settings: Settings
    options: TenancyOptions
    cache: TieredCache
    sweeper: CacheSweepWorker
    resolver: TenantConfigResolver
    visit_tracker: VisitTracker
    analytics: AnalyticsClient
    database: Optional[DatabaseSessionFactory] = None

    async def start(self) -> None:
        self.sweeper.start()
        logger.info(
            "Tenancy started",
            enhanced_domains=self.options.enhanced_domains_enabled,
            remote_cache=self.cache.remote_name,
            database=self.database is not None,
        )

    async def close(self) -> None:
        await self.sweeper.stop()
        await self.visit_tracker.drain()
        await self.analytics.close()
        await self.cache.close()
        if self.database is not None:
            await self.database.dispose()
        logger.info("Tenancy stopped")


def build_tenancy_container(
    settings: Settings,
    *,
    remote: Optional[IRemoteStore] = None,
    repository: Optional[DomainRepository] = None,
    analytics: Optional[AnalyticsClient] = None,
    clock: Optional[Clock] = None,
    metrics: Optional[MetricsCollector] = None,
) -> TenancyContainer:
    """
    Wire the tenancy context from settings.
    Explicit `remote` / `repository` / `analytics` arguments replace the settings-driven ones.
    """
    metrics = metrics or get_metrics()
    options = TenancyOptions.from_settings(settings)

    memory = MemoryTTLCache(clock=clock) if clock is not None else MemoryTTLCache()
    cache = TieredCache(memory, remote if remote is not None else build_remote_store(settings))

    database: Optional[DatabaseSessionFactory] = None
    if repository is None and settings.database_url:
        database = DatabaseSessionFactory(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        repository = SqlAlchemyDomainRepository(database.session_factory)

    analytics = analytics or AnalyticsClient(settings.analytics_track_url)

    return TenancyContainer(
        settings=settings,
        options=options,
        cache=cache,
        sweeper=CacheSweepWorker(memory, interval=settings.cache_sweep_interval_seconds, metrics=metrics),
        resolver=TenantConfigResolver(cache, repository, options, metrics=metrics),
        visit_tracker=VisitTracker(analytics, options, metrics=metrics),
        analytics=analytics,
        database=database,
    )


# --- FastAPI providers ---
def get_tenancy(request: Request) -> TenancyContainer:
    return request.app.state.tenancy


def get_tenant_resolver(request: Request) -> TenantConfigResolver:
    return get_tenancy(request).resolver


def get_visit_tracker(request: Request) -> VisitTracker:
    return get_tenancy(request).visit_tracker
