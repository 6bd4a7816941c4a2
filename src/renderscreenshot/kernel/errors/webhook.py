"""Webhook errors – structural problems with an (authenticated) payload."""

from __future__ import annotations

from typing import Any

from renderscreenshot.kernel.errors.base import BaseError


class WebhookPayloadError(BaseError):
    """The webhook body could not be decoded into a :class:`WebhookEvent`.

    Signature rejection never raises; this error only comes out of the
    event parser, which is meant to run after verification succeeded.
    """

    default_code = "webhook_payload_error"

    def __init__(self, message: str, *, field: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.field = field


__all__ = ["WebhookPayloadError"]
