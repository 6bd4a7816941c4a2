"""Unit tests – parsing verified webhook payloads into typed events."""
from __future__ import annotations

import json
from datetime import UTC, datetime

import pytest

from renderscreenshot.application.screenshots import ScreenshotResponse
from renderscreenshot.application.webhooks import (
    BatchFinished,
    ScreenshotCompleted,
    ScreenshotFailed,
    UnknownEventData,
    WebhookError,
    WebhookEventType,
    parse_webhook,
)
from renderscreenshot.kernel.errors import WebhookPayloadError


def _body(event: str, data: dict | None = None, **extra: object) -> str:
    payload: dict = {"event": event, "id": "evt_1", "timestamp": "2024-01-18T12:00:00Z"}
    if data is not None:
        payload["data"] = data
    payload.update(extra)
    return json.dumps(payload)


class TestScreenshotCompleted:
    def test_maps_fields(self) -> None:
        event = parse_webhook(
            _body(
                "screenshot.completed",
                {
                    "url": "https://example.com",
                    "screenshot_url": "https://cdn.renderscreenshot.com/abc.png",
                    "width": 1200,
                    "height": 630,
                    "format": "webp",
                    "size": 48213,
                    "cached": True,
                },
            )
        )
        assert event.id == "evt_1"
        assert event.type is WebhookEventType.SCREENSHOT_COMPLETED
        assert event.is_known
        assert event.occurred_at == datetime(2024, 1, 18, 12, 0, tzinfo=UTC)
        assert event.data == ScreenshotCompleted(
            response=ScreenshotResponse(
                url="https://cdn.renderscreenshot.com/abc.png",
                width=1200,
                height=630,
                format="webp",
                size=48213,
                cached=True,
            ),
            url="https://example.com",
        )

    def test_defaults_when_fields_missing(self) -> None:
        event = parse_webhook(_body("screenshot.completed", {}))
        assert isinstance(event.data, ScreenshotCompleted)
        assert event.data.response == ScreenshotResponse(url="")
        assert event.data.response.format == "png"
        assert event.data.url is None


class TestScreenshotFailed:
    def test_error_mapped(self) -> None:
        event = parse_webhook(
            _body("screenshot.failed", {"url": "https://example.com", "error": "Navigation timeout"})
        )
        assert event.type is WebhookEventType.SCREENSHOT_FAILED
        assert event.data == ScreenshotFailed(
            error=WebhookError(code="render_failed", message="Navigation timeout"),
            url="https://example.com",
        )

    def test_default_message(self) -> None:
        event = parse_webhook(_body("screenshot.failed", {}))
        assert isinstance(event.data, ScreenshotFailed)
        assert event.data.error.message == "Unknown error"


class TestBatchEvents:
    @pytest.mark.parametrize("name", ["batch.completed", "batch.failed"])
    def test_batch_id_is_event_id(self, name: str) -> None:
        event = parse_webhook(
            _body(name, {"summary": {"total": 3, "completed": 2, "failed": 1}, "results_url": "https://r"})
        )
        assert event.data == BatchFinished(
            batch_id="evt_1",
            summary={"total": 3, "completed": 2, "failed": 1},
            results_url="https://r",
        )


class TestUnknownEvents:
    def test_unknown_type_keeps_raw(self) -> None:
        event = parse_webhook(_body("screenshot.queued", {"position": 4}))
        assert event.type == "screenshot.queued"
        assert not event.is_known
        assert event.data == UnknownEventData(raw={"position": 4})

    def test_missing_event_and_data(self) -> None:
        event = parse_webhook("{}")
        assert event.type == ""
        assert event.id == ""
        assert event.occurred_at is None
        assert event.data == UnknownEventData(raw={})


class TestInputs:
    def test_bytes_payload(self) -> None:
        event = parse_webhook(_body("screenshot.failed", {}).encode())
        assert event.type is WebhookEventType.SCREENSHOT_FAILED

    def test_mapping_payload(self) -> None:
        event = parse_webhook({"event": "batch.completed", "id": "batch_9"})
        assert isinstance(event.data, BatchFinished)
        assert event.data.batch_id == "batch_9"

    def test_naive_timestamp_is_utc(self) -> None:
        event = parse_webhook(_body("x", timestamp="2024-01-18T12:00:00"))
        assert event.occurred_at == datetime(2024, 1, 18, 12, 0, tzinfo=UTC)

    def test_offset_timestamp(self) -> None:
        event = parse_webhook(_body("x", timestamp="2024-01-18T14:00:00+02:00"))
        assert event.occurred_at == datetime(2024, 1, 18, 12, 0, tzinfo=UTC)

    @pytest.mark.parametrize("timestamp", ["yesterday", "2024-13-45T99:00:00Z", 1705579200, ["2024"]])
    def test_unreadable_timestamp_becomes_none(self, timestamp: object) -> None:
        event = parse_webhook(_body("screenshot.completed", timestamp=timestamp))
        assert event.occurred_at is None
        assert event.type is WebhookEventType.SCREENSHOT_COMPLETED


class TestMalformedPayloads:
    @pytest.mark.parametrize("payload", ["not json", "", b"\xff\xfe", "[1, 2]", '"text"', "null"])
    def test_rejected(self, payload: str | bytes) -> None:
        with pytest.raises(WebhookPayloadError):
            parse_webhook(payload)

    def test_non_object_data(self) -> None:
        with pytest.raises(WebhookPayloadError) as info:
            parse_webhook(json.dumps({"event": "screenshot.completed", "data": [1]}))
        assert info.value.field == "data"

