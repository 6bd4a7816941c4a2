"""Testing – build signed webhook deliveries for receiver tests."""
from __future__ import annotations

from renderscreenshot.application.webhooks import SIGNATURE_HEADER, TIMESTAMP_HEADER, WebhookSigner
from renderscreenshot.application.webhooks.signature import Payload
from renderscreenshot.kernel.time import Clock, SystemClock, epoch_seconds


def signed_webhook(
    payload: Payload,
    secret: str,
    timestamp: int | str | None = None,
    *,
    clock: Clock | None = None,
) -> dict[str, str]:
    """Headers the service would send alongside *payload*.

    The timestamp defaults to *clock* (or the wall clock) so the delivery
    is fresh for a verifier using the same clock.
    """
    if timestamp is None:
        timestamp = epoch_seconds(clock or SystemClock())
    ts = str(timestamp)
    return {
        SIGNATURE_HEADER: WebhookSigner.sign(payload, ts, secret),
        TIMESTAMP_HEADER: ts,
    }


__all__ = ["signed_webhook"]
