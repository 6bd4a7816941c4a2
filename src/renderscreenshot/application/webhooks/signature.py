"""Application webhooks – HMAC-SHA256 signatures over ``<timestamp>.<payload>``."""
from __future__ import annotations

import hashlib
import hmac
from typing import Union

__all__ = ["Payload", "WebhookSigner"]

Payload = Union[str, bytes]


class WebhookSigner:
    """Computes and compares webhook signatures.

    The signed message is the timestamp header, a period, and the raw body
    exactly as delivered. Verifying against a re-serialized body breaks the
    signature whenever key order or whitespace differs.
    """

    ALG = "sha256"
    PREFIX = f"{ALG}="

    @staticmethod
    def message(timestamp: str, payload: Payload) -> bytes:
        # surrogatepass: a str decoded with surrogateescape still yields bytes
        body = payload if isinstance(payload, bytes) else payload.encode("utf-8", "surrogatepass")
        return timestamp.encode("utf-8", "surrogatepass") + b"." + body

    @classmethod
    def sign(cls, payload: Payload, timestamp: str | int, secret: str) -> str:
        """Return a signature string of the form ``sha256=<hexdigest>``."""
        mac = hmac.new(
            secret.encode("utf-8", "surrogatepass"),
            cls.message(str(timestamp), payload),
            hashlib.sha256,
        )
        return f"{cls.PREFIX}{mac.hexdigest()}"

    @staticmethod
    def matches(expected: str, received: str) -> bool:
        """Constant-time equality; ``False`` (never an exception) on any mismatch."""
        return hmac.compare_digest(
            expected.encode("utf-8", "surrogatepass"),
            received.encode("utf-8", "surrogatepass"),
        )
