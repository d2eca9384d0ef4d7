"""
HTTP Transport
==============
Thin httpx wrapper used by the connectors. Every request carries an explicit
cache key and TTL; responses are kept in memory until the TTL runs out.
There are no retries — a failed request raises httpx.HTTPError to the caller.
"""

import httpx
import logging
import os
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

logger = logging.getLogger(__name__)

HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "15"))


@dataclass
class _CacheEntry:
    value: Any
    expires: datetime


class HttpTransport:
    def __init__(self, timeout: float = HTTP_TIMEOUT):
        self.timeout = timeout
        self._cache: dict[str, _CacheEntry] = {}

    def _cached(self, cache_key: str) -> Optional[_CacheEntry]:
        entry = self._cache.get(cache_key)
        if entry is None:
            return None
        if entry.expires <= datetime.now(timezone.utc):
            del self._cache[cache_key]
            return None
        return entry

    async def _get(self, url: str, headers: Optional[dict]) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.get(url, headers=headers or {})
            resp.raise_for_status()
            return resp

    async def get_json(self, url: str, *, cache_key: str, ttl: timedelta, headers: Optional[dict] = None) -> Any:
        entry = self._cached(cache_key)
        if entry is not None:
            return entry.value
        resp = await self._get(url, headers)
        value = resp.json()
        self._store(cache_key, value, ttl)
        return value

    async def get_text(self, url: str, *, cache_key: str, ttl: timedelta, headers: Optional[dict] = None) -> str:
        entry = self._cached(cache_key)
        if entry is not None:
            return entry.value
        resp = await self._get(url, headers)
        self._store(cache_key, resp.text, ttl)
        return resp.text

    def _store(self, cache_key: str, value: Any, ttl: timedelta):
        self._cache[cache_key] = _CacheEntry(value, datetime.now(timezone.utc) + ttl)
        logger.debug(f"Cached {cache_key} for {ttl}.")
