"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── RenderScreenshotError   (api.py)
    ├── WebhookPayloadError     (webhook.py)
    └── ConfigError             (renderscreenshot.config.validation)
        ├── MissingRequiredSettingError
        └── InvalidSettingValueError
"""

from renderscreenshot.kernel.errors.api import RETRYABLE_CODES, ErrorCode, RenderScreenshotError
from renderscreenshot.kernel.errors.base import BaseError
from renderscreenshot.kernel.errors.webhook import WebhookPayloadError

__all__ = [
    "BaseError",
    "ErrorCode",
    "RETRYABLE_CODES",
    "RenderScreenshotError",
    "WebhookPayloadError",
]
