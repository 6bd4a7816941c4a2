"""HTTP adapter – authenticated async httpx transport."""
from renderscreenshot.adapters.http.client import (
    API_VERSION,
    USER_AGENT,
    HttpxHttpClient,
    error_from_response,
)
from renderscreenshot.adapters.http.retry_client import RetryingHttpClient

__all__ = [
    "API_VERSION",
    "HttpxHttpClient",
    "RetryingHttpClient",
    "USER_AGENT",
    "error_from_response",
]
