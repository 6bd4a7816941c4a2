"""Application signing – canonical messages and signed screenshot URLs."""
from renderscreenshot.application.signing.canonical import (
    canonical_query,
    canonical_value,
    expires_epoch,
    signing_message,
)
from renderscreenshot.application.signing.url_signer import UrlSigner, sign_url

__all__ = [
    "UrlSigner",
    "canonical_query",
    "canonical_value",
    "expires_epoch",
    "sign_url",
    "signing_message",
]
