from __future__ import annotations

from typing import Optional

import httpx

from src.shared.logging import get_logger

logger = get_logger(__name__)


class AnalyticsClient:
    """
    Posts visit events to the analytics endpoint:

      POST {track_url}  body {"domainId": <int>, "type": "visit"}

    The response body is ignored; non-2xx raises httpx.HTTPStatusError.
    """

    def __init__(
        self,
        track_url: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 5.0,
    ) -> None:
        self.track_url = track_url
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = client is None

    async def send_visit(self, domain_id: int) -> None:
        response = await self._client.post(self.track_url, json={"domainId": domain_id, "type": "visit"})
        response.raise_for_status()
        logger.debug("Visit tracked", domain_id=domain_id, status_code=response.status_code)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
