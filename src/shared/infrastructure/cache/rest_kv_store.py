"""
REST key-value store
Managed Redis-compatible service reachable over HTTP with a bearer token
"""
from __future__ import annotations

import json
from typing import Any, Optional
from urllib.parse import quote

import httpx

from src.shared.logging import get_logger

logger = get_logger(__name__)


class RestKVStore:
    """
    Remote store speaking the REST key-value protocol:

      GET  {base_url}/get/{key}  -> {"result": "<json>" | null}
      POST {base_url}/set/{key}  body {"value": "<json>", "ex": ttl}
      POST {base_url}/del/{key}

    Values are JSON-encoded before upload and decoded after download.
    Network, status and parse failures are logged and treated as misses.
    """

    name = "rest_kv"

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 5.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._headers = {"Authorization": f"Bearer {token}"}
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = client is None

    def _url(self, op: str, key: str) -> str:
        return f"{self.base_url}/{op}/{quote(key, safe=':')}"

    async def get(self, key: str) -> Any | None:
        try:
            response = await self._client.get(self._url("get", key), headers=self._headers)
            if response.status_code != httpx.codes.OK:
                logger.warning("KV GET returned non-200", key=key, status_code=response.status_code)
                return None
            raw = response.json().get("result")
            if raw is None:
                return None
            return json.loads(raw) if isinstance(raw, str) else raw
        except httpx.HTTPError as e:
            logger.warning("KV GET failed", key=key, error=str(e))
            return None
        except (ValueError, AttributeError) as e:
            logger.warning("Failed to deserialize KV value", key=key, error=str(e))
            return None

    async def set(self, key: str, value: Any, ttl: int) -> bool:
        try:
            payload = {"value": json.dumps(value), "ex": ttl}
            response = await self._client.post(self._url("set", key), headers=self._headers, json=payload)
            response.raise_for_status()
            return True
        except httpx.HTTPError as e:
            logger.warning("KV SET failed", key=key, error=str(e))
            return False
        except (TypeError, ValueError) as e:
            logger.warning("KV SET could not serialize value", key=key, error=str(e))
            return False

    async def delete(self, key: str) -> bool:
        try:
            response = await self._client.post(self._url("del", key), headers=self._headers)
            response.raise_for_status()
            return True
        except httpx.HTTPError as e:
            logger.warning("KV DELETE failed", key=key, error=str(e))
            return False

    async def ping(self) -> bool:
        try:
            response = await self._client.get(f"{self.base_url}/ping", headers=self._headers)
            return response.status_code == httpx.codes.OK
        except httpx.HTTPError:
            return False

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
