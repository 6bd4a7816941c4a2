"""Application webhooks – typed events parsed from a verified payload.

Always verify the raw body first, then parse: decoding happens here, after
authentication, never before it.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any, Mapping, Union

from renderscreenshot.application.screenshots.models import ScreenshotResponse
from renderscreenshot.kernel.errors import WebhookPayloadError
from renderscreenshot.observability.logging import get_logger

__all__ = [
    "BatchFinished",
    "ScreenshotCompleted",
    "ScreenshotFailed",
    "UnknownEventData",
    "WebhookError",
    "WebhookEvent",
    "WebhookEventData",
    "WebhookEventType",
    "parse_webhook",
]

logger = get_logger(__name__)


class WebhookEventType(StrEnum):
    SCREENSHOT_COMPLETED = "screenshot.completed"
    SCREENSHOT_FAILED = "screenshot.failed"
    BATCH_COMPLETED = "batch.completed"
    BATCH_FAILED = "batch.failed"


@dataclass(frozen=True)
class WebhookError:
    code: str
    message: str


@dataclass(frozen=True)
class ScreenshotCompleted:
    response: ScreenshotResponse
    url: str | None = None


@dataclass(frozen=True)
class ScreenshotFailed:
    error: WebhookError
    url: str | None = None


@dataclass(frozen=True)
class BatchFinished:
    """Payload of ``batch.completed`` and ``batch.failed``; the event id is the batch id."""

    batch_id: str
    summary: Mapping[str, int] | None = None
    results_url: str | None = None


@dataclass(frozen=True)
class UnknownEventData:
    """Payload of an event type this SDK version does not know yet."""

    raw: Mapping[str, Any] = field(default_factory=dict)


WebhookEventData = Union[ScreenshotCompleted, ScreenshotFailed, BatchFinished, UnknownEventData]


@dataclass(frozen=True)
class WebhookEvent:
    id: str
    type: WebhookEventType | str
    occurred_at: datetime | None
    data: WebhookEventData

    @property
    def is_known(self) -> bool:
        return isinstance(self.type, WebhookEventType)


def _decode(payload: str | bytes | Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(payload, Mapping):
        return payload
    try:
        decoded = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise WebhookPayloadError(f"Webhook payload is not valid JSON: {exc}", cause=exc) from exc
    if not isinstance(decoded, dict):
        raise WebhookPayloadError(
            f"Webhook payload must be a JSON object, got {type(decoded).__name__}"
        )
    return decoded


def _occurred_at(raw: Any) -> datetime | None:
    if raw is None:
        return None
    if not isinstance(raw, str):
        logger.debug("webhook_timestamp_ignored", reason="not_a_string")
        return None
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        logger.debug("webhook_timestamp_ignored", reason="not_iso8601", value=raw)
        return None
    return parsed if parsed.tzinfo is not None else parsed.replace(tzinfo=UTC)


def _event_type(raw: Any) -> WebhookEventType | str:
    try:
        return WebhookEventType(raw)
    except ValueError:
        return raw if isinstance(raw, str) else ""


def parse_webhook(payload: str | bytes | Mapping[str, Any]) -> WebhookEvent:
    """Decode a webhook body into a :class:`WebhookEvent`.

    Unknown event types yield :class:`UnknownEventData` and an unreadable
    timestamp leaves ``occurred_at`` as ``None``; neither is an error.

    Raises:
        WebhookPayloadError: the body is not a JSON object or its ``data``
            is not an object.
    """
    raw = _decode(payload)
    data = raw.get("data") or {}
    if not isinstance(data, Mapping):
        raise WebhookPayloadError("Webhook 'data' must be a JSON object", field="data")
    event_id = str(raw.get("id", ""))
    event_type = _event_type(raw.get("event"))
    url = data.get("url")

    body: WebhookEventData
    match event_type:
        case WebhookEventType.SCREENSHOT_COMPLETED:
            body = ScreenshotCompleted(
                response=ScreenshotResponse(
                    url=data.get("screenshot_url") or "",
                    width=data.get("width") or 0,
                    height=data.get("height") or 0,
                    format=data.get("format") or "png",
                    size=data.get("size") or 0,
                    cached=bool(data.get("cached", False)),
                ),
                url=url,
            )
        case WebhookEventType.SCREENSHOT_FAILED:
            body = ScreenshotFailed(
                error=WebhookError(
                    code="render_failed",
                    message=data.get("error") or "Unknown error",
                ),
                url=url,
            )
        case WebhookEventType.BATCH_COMPLETED | WebhookEventType.BATCH_FAILED:
            body = BatchFinished(
                batch_id=event_id,
                summary=data.get("summary"),
                results_url=data.get("results_url"),
            )
        case _:
            body = UnknownEventData(raw=data)

    return WebhookEvent(
        id=event_id,
        type=event_type,
        occurred_at=_occurred_at(raw.get("timestamp")),
        data=body,
    )
