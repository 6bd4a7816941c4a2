"""Screenshots – cache management endpoints."""
from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Iterable, Protocol
from urllib.parse import quote

from renderscreenshot.application.screenshots.models import PurgeResult
from renderscreenshot.kernel.errors import RenderScreenshotError

__all__ = ["ApiTransport", "CacheManager", "iso_utc"]


class ApiTransport(Protocol):
    """Port: the authenticated request surface CacheManager and Client rely on."""

    async def get(self, path: str, **kwargs: Any) -> Any: ...
    async def post(self, path: str, **kwargs: Any) -> Any: ...
    async def delete(self, path: str, **kwargs: Any) -> Any: ...


def iso_utc(value: datetime) -> str:
    """``2024-01-01T00:00:00.000Z`` form the cache API expects."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class CacheManager:
    """Read and purge rendered screenshots cached by the service."""

    def __init__(self, http: ApiTransport) -> None:
        self._http = http

    async def get(self, key: str) -> bytes | None:
        """Cached image bytes for *key* (from the ``X-Cache-Key`` header), or ``None``."""
        try:
            return await self._http.get(f"/cache/{quote(key, safe='')}", response_type="bytes")
        except RenderScreenshotError as exc:
            if exc.http_status == 404:
                return None
            raise

    async def delete(self, key: str) -> bool:
        """Delete one entry; ``False`` when it did not exist."""
        response = await self._http.delete(f"/cache/{quote(key, safe='')}")
        return bool(response.get("deleted", False))

    async def purge(self, keys: Iterable[str]) -> PurgeResult:
        return await self._purge({"keys": list(keys)})

    async def purge_url(self, pattern: str) -> PurgeResult:
        """Purge entries whose source URL matches a glob, e.g. ``https://site.com/blog/*``."""
        return await self._purge({"url": pattern})

    async def purge_before(self, before: datetime) -> PurgeResult:
        return await self._purge({"before": iso_utc(before)})

    async def purge_pattern(self, pattern: str) -> PurgeResult:
        """Purge entries whose storage path matches a glob, e.g. ``screenshots/2024/*``."""
        return await self._purge({"pattern": pattern})

    async def _purge(self, body: dict[str, Any]) -> PurgeResult:
        return PurgeResult.from_dict(await self._http.post("/cache/purge", body=body))
