"""Application webhooks – verification, header extraction and event parsing."""
from renderscreenshot.application.webhooks.events import (
    BatchFinished,
    ScreenshotCompleted,
    ScreenshotFailed,
    UnknownEventData,
    WebhookError,
    WebhookEvent,
    WebhookEventData,
    WebhookEventType,
    parse_webhook,
)
from renderscreenshot.application.webhooks.headers import (
    SIGNATURE_HEADER,
    TIMESTAMP_HEADER,
    HeaderSource,
    MappingHeaderSource,
    MultiDictHeaderSource,
    WebhookHeaders,
    as_header_source,
    extract_webhook_headers,
)
from renderscreenshot.application.webhooks.replay import InMemoryReplayStore, ReplayStore, replay_key
from renderscreenshot.application.webhooks.signature import WebhookSigner
from renderscreenshot.application.webhooks.verifier import (
    DEFAULT_TOLERANCE_SECONDS,
    WebhookVerifier,
    verify_webhook,
)

__all__ = [
    "BatchFinished",
    "DEFAULT_TOLERANCE_SECONDS",
    "HeaderSource",
    "InMemoryReplayStore",
    "MappingHeaderSource",
    "MultiDictHeaderSource",
    "ReplayStore",
    "SIGNATURE_HEADER",
    "ScreenshotCompleted",
    "ScreenshotFailed",
    "TIMESTAMP_HEADER",
    "UnknownEventData",
    "WebhookError",
    "WebhookEvent",
    "WebhookEventData",
    "WebhookEventType",
    "WebhookHeaders",
    "WebhookSigner",
    "WebhookVerifier",
    "as_header_source",
    "extract_webhook_headers",
    "parse_webhook",
    "replay_key",
    "verify_webhook",
]
