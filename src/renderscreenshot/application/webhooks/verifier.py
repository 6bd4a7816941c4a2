"""Application webhooks – signature and freshness verification.

Every rejection returns ``False``: missing fields, a malformed or stale
timestamp, and a wrong signature are indistinguishable to the caller. The
reason is only logged, at debug level.
"""
from __future__ import annotations

import re
from typing import Any

from renderscreenshot.application.webhooks.headers import extract_webhook_headers
from renderscreenshot.application.webhooks.replay import ReplayStore, replay_key
from renderscreenshot.application.webhooks.signature import Payload, WebhookSigner
from renderscreenshot.config.settings import DEFAULT_WEBHOOK_TOLERANCE, ClientSettings
from renderscreenshot.config.validation import MissingRequiredSettingError
from renderscreenshot.kernel.time import Clock, SystemClock, epoch_seconds
from renderscreenshot.observability.logging import get_logger

__all__ = ["DEFAULT_TOLERANCE_SECONDS", "WebhookVerifier", "verify_webhook"]

DEFAULT_TOLERANCE_SECONDS = DEFAULT_WEBHOOK_TOLERANCE

# Unix seconds fit in 18 digits; longer runs are rejected before int()
_TIMESTAMP_RE = re.compile(r"-?[0-9]{1,18}")

logger = get_logger(__name__)


def _parse_timestamp(timestamp: str) -> int | None:
    if not _TIMESTAMP_RE.fullmatch(timestamp):
        return None
    return int(timestamp)


def verify_webhook(
    payload: Payload,
    signature: str,
    timestamp: str,
    secret: str,
    *,
    clock: Clock | None = None,
    tolerance: int = DEFAULT_TOLERANCE_SECONDS,
) -> bool:
    """Return ``True`` when *signature* authenticates *payload* at *timestamp*.

    Args:
        payload: Raw request body, exactly as received (``str`` or ``bytes``).
        signature: ``X-Webhook-Signature`` value, ``sha256=<hex>``.
        timestamp: ``X-Webhook-Timestamp`` value, Unix seconds.
        secret: Webhook signing secret from the dashboard (not the API key).
        clock: Time source for the freshness check; wall clock by default.
        tolerance: Maximum ``|now - timestamp|`` in seconds, either direction.
    """
    if not payload or not signature or not timestamp or not secret:
        logger.debug("webhook_rejected", reason="missing_field")
        return False

    sent_at = _parse_timestamp(timestamp)
    if sent_at is None:
        logger.debug("webhook_rejected", reason="malformed_timestamp")
        return False

    now = epoch_seconds(clock or SystemClock())
    if abs(now - sent_at) > tolerance:
        logger.debug("webhook_rejected", reason="stale_timestamp", skew=now - sent_at)
        return False

    expected = WebhookSigner.sign(payload, timestamp, secret)
    if not WebhookSigner.matches(expected, signature):
        logger.debug("webhook_rejected", reason="signature_mismatch")
        return False
    return True


class WebhookVerifier:
    """Holds the webhook secret and verification settings for a receiver.

    Example::

        verifier = WebhookVerifier(settings.webhook_secret)

        @app.post("/webhooks/renderscreenshot")
        async def receive(request: Request):
            body = await request.body()
            if not verifier.verify_request(body, request.headers):
                raise HTTPException(401)
            event = parse_webhook(body)
    """

    def __init__(
        self,
        secret: str,
        *,
        tolerance: int = DEFAULT_TOLERANCE_SECONDS,
        clock: Clock | None = None,
        replay_store: ReplayStore | None = None,
    ) -> None:
        if tolerance < 0:
            raise ValueError("tolerance must be >= 0")
        self._secret = secret
        self._tolerance = tolerance
        self._clock = clock or SystemClock()
        self._replay_store = replay_store

    @classmethod
    def from_settings(cls, settings: ClientSettings, **kwargs: Any) -> "WebhookVerifier":
        if not settings.webhook_secret:
            raise MissingRequiredSettingError("RENDERSCREENSHOT_WEBHOOK_SECRET")
        return cls(settings.webhook_secret, tolerance=settings.webhook_tolerance, **kwargs)

    @property
    def tolerance(self) -> int:
        return self._tolerance

    def verify(self, payload: Payload, signature: str, timestamp: str) -> bool:
        if not verify_webhook(
            payload,
            signature,
            timestamp,
            self._secret,
            clock=self._clock,
            tolerance=self._tolerance,
        ):
            return False
        if self._replay_store is None:
            return True
        expires_at = int(timestamp) + self._tolerance
        if not self._replay_store.remember(replay_key(timestamp, signature), expires_at):
            logger.debug("webhook_rejected", reason="replayed")
            return False
        return True

    def verify_request(self, payload: Payload, headers: Any) -> bool:
        """Verify using the signature and timestamp found in *headers*."""
        found = extract_webhook_headers(headers)
        return self.verify(payload, found.signature, found.timestamp)

    def __repr__(self) -> str:
        return f"WebhookVerifier(tolerance={self._tolerance!r}, replay_store={self._replay_store!r})"
