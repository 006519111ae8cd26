from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.dependencies import TenancyContainer, build_tenancy_container
from src.shared.config import Settings, get_settings
from src.shared.exceptions import register_exception_handlers  # central mapping
from src.shared.health import router as health_router
from src.shared.infrastructure.observability.metrics import configure_metrics
from src.shared.logging import get_logger, setup_logging
from src.tenancy.api.middleware import TenantContextMiddleware
from src.tenancy.api.routes import router as domain_config_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    setup_logging(settings)

    tenancy: Optional[TenancyContainer] = getattr(app.state, "tenancy", None)
    if tenancy is None:
        configure_metrics(enabled=True)
        tenancy = build_tenancy_container(settings)
        app.state.tenancy = tenancy

    await tenancy.start()
    logger.info("Application startup complete", environment=settings.environment)
    try:
        yield
    finally:
        await tenancy.close()
        logger.info("Application shutdown complete")


def create_app(settings: Optional[Settings] = None, tenancy: Optional[TenancyContainer] = None) -> FastAPI:
    """
    Build the API. `tenancy` is normally built in the lifespan; passing one
    makes the app usable without running the lifespan (tests).
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Big Based Tenant Resolution API",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    if tenancy is not None:
        app.state.tenancy = tenancy

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=True,
    )

    # Host → request.state.domain_config
    app.add_middleware(TenantContextMiddleware)

    # Routers
    app.include_router(domain_config_router)
    app.include_router(health_router)

    # Centralized error handling → {code, message, details?, correlation_id?}
    register_exception_handlers(app)

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint."""
        return {
            "message": "Big Based Tenant Resolution API",
            "docs": "/docs",
            "health": "/_health/cache",
        }

    return app


app = create_app()
