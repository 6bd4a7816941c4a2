"""Signing – HMAC-SHA256 signed screenshot URLs."""
from __future__ import annotations

import hashlib
import hmac
from typing import Mapping

from renderscreenshot.application.signing.canonical import Expiry, Scalar, signing_message

__all__ = ["UrlSigner", "sign_url"]


class UrlSigner:
    """Produces URLs the screenshot service can verify without an API call.

    The secret is the caller's API key, not the webhook signing secret.
    Signing validates nothing: a negative width is signed as-is and left
    for the server to reject.
    """

    ALG = "sha256"

    def __init__(self, secret: str, endpoint: str) -> None:
        self._secret = secret.encode()
        self._endpoint = endpoint

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def signature_for(self, message: str) -> str:
        """Lower-case hex HMAC-SHA256 of *message*."""
        return hmac.new(self._secret, message.encode(), hashlib.sha256).hexdigest()

    def sign(self, parameters: Mapping[str, Scalar | None], expires_at: Expiry) -> str:
        """Return ``<endpoint>?<message>&signature=<hex>``."""
        message = signing_message(parameters, expires_at)
        return f"{self._endpoint}?{message}&signature={self.signature_for(message)}"


def sign_url(
    parameters: Mapping[str, Scalar | None],
    expires_at: Expiry,
    secret: str,
    endpoint: str,
) -> str:
    """Functional form of :meth:`UrlSigner.sign`."""
    return UrlSigner(secret, endpoint).sign(parameters, expires_at)
