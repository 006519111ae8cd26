from __future__ import annotations

from typing import Tuple

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from src.dependencies import get_tenancy
from src.shared.exceptions import RouteNotAvailableError, error_response
from src.shared.logging import bind_request_context, clear_request_context, get_logger
from src.tenancy.domain.services.navigation_policy import is_route_allowed

logger = get_logger(__name__)

# Service endpoints: resolved for logging context, never tracked or route-checked
SERVICE_PREFIXES: Tuple[str, ...] = ("/api/", "/_health", "/docs", "/redoc", "/openapi.json")


class TenantContextMiddleware(BaseHTTPMiddleware):
    """
    Per request:
      - resolve Host -> DomainConfig onto request.state.domain_config
      - bind tenant_domain / site_type into the structlog context
      - fire visit tracking for site pages
      - 404 route_not_available for paths reserved to another site type
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            tenancy = get_tenancy(request)
            config = await tenancy.resolver.get_domain_config(request.headers.get("host", ""))
            request.state.domain_config = config

            path = request.url.path
            bind_request_context(
                request_id=getattr(request.state, "request_id", None),
                tenant_domain=config.domain,
                site_type=config.site_type.value,
                path=path,
                method=request.method,
            )

            if not path.startswith(SERVICE_PREFIXES):
                if not is_route_allowed(config, path):
                    logger.info("Route not available for site type")
                    return error_response(RouteNotAvailableError(details={"path": path}))
                tenancy.visit_tracker.track_visit(config.id)

            return await call_next(request)
        finally:
            clear_request_context()
