"""Screenshots – response value objects.

The API answers in snake_case; a few older endpoints use camelCase, so each
``from_dict`` reads either spelling.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

__all__ = [
    "BatchRequestItem",
    "BatchResponse",
    "BatchResponseItem",
    "DeviceInfo",
    "PresetInfo",
    "PurgeResult",
    "ScreenshotResponse",
]


def _pick(data: Mapping[str, Any], snake: str, camel: str | None = None, default: Any = None) -> Any:
    if snake in data:
        return data[snake]
    if camel is not None and camel in data:
        return data[camel]
    return default


@dataclass(frozen=True)
class ScreenshotResponse:
    """Metadata for a rendered screenshot."""

    url: str
    width: int = 0
    height: int = 0
    format: str = "png"
    size: int = 0
    cached: bool = False
    cache_url: str | None = None
    cache_key: str | None = None
    ttl: int | None = None
    storage_path: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ScreenshotResponse":
        return cls(
            url=_pick(data, "url", default=""),
            width=_pick(data, "width", default=0),
            height=_pick(data, "height", default=0),
            format=_pick(data, "format", default="png"),
            size=_pick(data, "size", default=0),
            cached=_pick(data, "cached", default=False),
            cache_url=_pick(data, "cache_url", "cacheUrl"),
            cache_key=_pick(data, "cache_key", "cacheKey"),
            ttl=_pick(data, "ttl"),
            storage_path=_pick(data, "storage_path", "storagePath"),
        )


@dataclass(frozen=True)
class BatchRequestItem:
    """One URL of a per-item batch, with its own options."""

    url: str
    options: Any = None


@dataclass(frozen=True)
class BatchResponseItem:
    url: str
    success: bool
    response: ScreenshotResponse | None = None
    error: dict[str, str] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BatchResponseItem":
        response = data.get("response")
        return cls(
            url=data.get("url", ""),
            success=bool(data.get("success", False)),
            response=ScreenshotResponse.from_dict(response) if response else None,
            error=data.get("error"),
        )


@dataclass(frozen=True)
class BatchResponse:
    """Status of a batch job; ``status`` is pending, processing, completed or failed."""

    id: str
    status: str
    total: int = 0
    completed: int = 0
    failed: int = 0
    results: tuple[BatchResponseItem, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BatchResponse":
        return cls(
            id=data.get("id", ""),
            status=data.get("status", "pending"),
            total=data.get("total", 0),
            completed=data.get("completed", 0),
            failed=data.get("failed", 0),
            results=tuple(BatchResponseItem.from_dict(r) for r in data.get("results") or ()),
        )


@dataclass(frozen=True)
class PurgeResult:
    purged: int
    keys: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PurgeResult":
        return cls(purged=data.get("purged", 0), keys=tuple(data.get("keys") or ()))


@dataclass(frozen=True)
class PresetInfo:
    id: str
    name: str
    description: str = ""
    width: int = 0
    height: int = 0
    scale: float | None = None
    format: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PresetInfo":
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            description=data.get("description", ""),
            width=data.get("width", 0),
            height=data.get("height", 0),
            scale=data.get("scale"),
            format=data.get("format"),
        )


@dataclass(frozen=True)
class DeviceInfo:
    id: str
    name: str
    width: int = 0
    height: int = 0
    scale: float = 1.0
    mobile: bool = False
    user_agent: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DeviceInfo":
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            width=data.get("width", 0),
            height=data.get("height", 0),
            scale=data.get("scale", 1.0),
            mobile=data.get("mobile", False),
            user_agent=_pick(data, "user_agent", "userAgent", default=""),
        )
