"""API errors – every failed call to the screenshot service surfaces as one type."""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Mapping

from renderscreenshot.kernel.errors.base import BaseError


class ErrorCode(StrEnum):
    """Error codes returned by the RenderScreenshot API."""

    INVALID_REQUEST = "invalid_request"
    INVALID_URL = "invalid_url"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    TIMEOUT = "timeout"
    RENDER_FAILED = "render_failed"
    INTERNAL_ERROR = "internal_error"


RETRYABLE_CODES: frozenset[str] = frozenset(
    {
        ErrorCode.RATE_LIMITED,
        ErrorCode.TIMEOUT,
        ErrorCode.RENDER_FAILED,
        ErrorCode.INTERNAL_ERROR,
    }
)


class RenderScreenshotError(BaseError):
    """Normalized failure of a request to the RenderScreenshot API.

    ``code`` is kept as the raw string the server sent, so codes newer than
    :class:`ErrorCode` still round-trip; ``retryable`` is derived from it.
    """

    default_code = ErrorCode.INTERNAL_ERROR.value

    def __init__(
        self,
        http_status: int,
        code: str,
        message: str,
        retry_after: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, code=str(code), **kwargs)
        self.http_status = http_status
        self.retry_after = retry_after
        self.retryable = self.code in RETRYABLE_CODES

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(http_status={self.http_status!r}, "
            f"code={self.code!r}, message={self.message!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["http_status"] = self.http_status
        base["retryable"] = self.retryable
        if self.retry_after is not None:
            base["retry_after"] = self.retry_after
        return base

    @classmethod
    def from_response(
        cls,
        http_status: int,
        body: Mapping[str, Any] | None = None,
        retry_after: int | None = None,
    ) -> "RenderScreenshotError":
        """Build an error from a non-2xx response body."""
        body = body or {}
        code = body.get("code")
        message = body.get("message")
        if not isinstance(message, str):
            message = body.get("error")
        if not isinstance(message, str):
            message = "An unknown error occurred"
        return cls(
            http_status,
            code if isinstance(code, str) else ErrorCode.INTERNAL_ERROR,
            message,
            retry_after,
        )

    @classmethod
    def invalid_url(cls, url: str) -> "RenderScreenshotError":
        return cls(400, ErrorCode.INVALID_URL, f"Invalid URL provided: {url}")

    @classmethod
    def invalid_request(cls, message: str) -> "RenderScreenshotError":
        return cls(400, ErrorCode.INVALID_REQUEST, message)

    @classmethod
    def unauthorized(cls) -> "RenderScreenshotError":
        return cls(401, ErrorCode.UNAUTHORIZED, "Invalid or missing API key")

    @classmethod
    def rate_limited(cls, retry_after: int | None = None) -> "RenderScreenshotError":
        return cls(
            429,
            ErrorCode.RATE_LIMITED,
            "Rate limit exceeded. Please wait before making more requests.",
            retry_after,
        )

    @classmethod
    def timeout(cls) -> "RenderScreenshotError":
        return cls(408, ErrorCode.TIMEOUT, "Screenshot request timed out")

    @classmethod
    def internal(cls, message: str | None = None) -> "RenderScreenshotError":
        return cls(500, ErrorCode.INTERNAL_ERROR, message or "An internal error occurred")


__all__ = ["ErrorCode", "RETRYABLE_CODES", "RenderScreenshotError"]
