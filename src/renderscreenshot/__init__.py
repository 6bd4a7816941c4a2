"""
renderscreenshot – Python SDK for the RenderScreenshot API.

Import path convention::

    from renderscreenshot import Client, TakeOptions
    from renderscreenshot import verify_webhook, parse_webhook, extract_webhook_headers
    from renderscreenshot.config import ClientSettings, EnvSettingsLoader
    from renderscreenshot.testing import FakeClock, signed_webhook
"""

from renderscreenshot._version import __version__
from renderscreenshot.application.options import Geolocation, TakeOptions, TakeOptionsConfig
from renderscreenshot.application.screenshots import (
    BatchRequestItem,
    BatchResponse,
    CacheManager,
    Client,
    ScreenshotResponse,
)
from renderscreenshot.application.signing import UrlSigner, sign_url
from renderscreenshot.application.webhooks import (
    WebhookEvent,
    WebhookEventType,
    WebhookVerifier,
    extract_webhook_headers,
    parse_webhook,
    verify_webhook,
)
from renderscreenshot.kernel.errors import ErrorCode, RenderScreenshotError, WebhookPayloadError

__all__ = [
    "BatchRequestItem",
    "BatchResponse",
    "CacheManager",
    "Client",
    "ErrorCode",
    "Geolocation",
    "RenderScreenshotError",
    "ScreenshotResponse",
    "TakeOptions",
    "TakeOptionsConfig",
    "UrlSigner",
    "WebhookEvent",
    "WebhookEventType",
    "WebhookPayloadError",
    "WebhookVerifier",
    "__version__",
    "extract_webhook_headers",
    "parse_webhook",
    "sign_url",
    "verify_webhook",
]
