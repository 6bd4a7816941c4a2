"""Unit tests for kernel errors."""

from __future__ import annotations

import json
import pickle

import pytest

from renderscreenshot.kernel.errors import (
    RETRYABLE_CODES,
    BaseError,
    ErrorCode,
    RenderScreenshotError,
    WebhookPayloadError,
)


# ---------------------------------------------------------------------------
# BaseError
# ---------------------------------------------------------------------------


class TestBaseError:
    def test_message_and_default_code(self) -> None:
        err = BaseError("boom")
        assert err.message == "boom"
        assert err.code == "renderscreenshot_error"
        assert err.detail == {}

    def test_str_is_json(self) -> None:
        err = BaseError("boom", code="x", detail={"k": 1})
        assert json.loads(str(err)) == {"code": "x", "message": "boom", "detail": {"k": 1}}

    def test_cause_is_chained(self) -> None:
        cause = ValueError("inner")
        err = BaseError("outer", cause=cause)
        assert err.__cause__ is cause
        assert err.to_dict()["cause"] == repr(cause)

    def test_pickle_round_trip_drops_cause(self) -> None:
        err = BaseError("outer", code="x", detail={"k": 1}, cause=ValueError("inner"))
        restored = pickle.loads(pickle.dumps(err))
        assert restored.to_dict() == {"code": "x", "message": "outer", "detail": {"k": 1}}
        assert restored.args == ("outer",)


# ---------------------------------------------------------------------------
# RenderScreenshotError
# ---------------------------------------------------------------------------


class TestRenderScreenshotError:
    @pytest.mark.parametrize(
        "code",
        [ErrorCode.RATE_LIMITED, ErrorCode.TIMEOUT, ErrorCode.RENDER_FAILED, ErrorCode.INTERNAL_ERROR],
    )
    def test_retryable_codes(self, code: ErrorCode) -> None:
        assert RenderScreenshotError(500, code, "x").retryable is True

    @pytest.mark.parametrize(
        "code",
        [
            ErrorCode.INVALID_REQUEST,
            ErrorCode.INVALID_URL,
            ErrorCode.UNAUTHORIZED,
            ErrorCode.FORBIDDEN,
            ErrorCode.NOT_FOUND,
        ],
    )
    def test_non_retryable_codes(self, code: ErrorCode) -> None:
        assert RenderScreenshotError(400, code, "x").retryable is False

    def test_retryable_set_matches_enum(self) -> None:
        assert RETRYABLE_CODES == {"rate_limited", "timeout", "render_failed", "internal_error"}

    def test_code_is_plain_string(self) -> None:
        err = RenderScreenshotError(400, ErrorCode.INVALID_URL, "bad")
        assert err.code == "invalid_url"
        assert type(err.code) is str

    def test_unknown_server_code_round_trips(self) -> None:
        err = RenderScreenshotError(402, "quota_exceeded", "Out of credits")
        assert err.code == "quota_exceeded"
        assert err.retryable is False

    def test_from_response_reads_message(self) -> None:
        err = RenderScreenshotError.from_response(
            400, {"code": "invalid_url", "message": "URL must be absolute"}
        )
        assert err.http_status == 400
        assert err.code == "invalid_url"
        assert err.message == "URL must be absolute"

    def test_from_response_falls_back_to_error_field(self) -> None:
        err = RenderScreenshotError.from_response(403, {"error": "Forbidden"})
        assert err.message == "Forbidden"
        assert err.code == "internal_error"

    def test_from_response_without_body(self) -> None:
        err = RenderScreenshotError.from_response(502)
        assert err.message == "An unknown error occurred"
        assert err.retryable is True

    def test_from_response_keeps_retry_after(self) -> None:
        err = RenderScreenshotError.from_response(429, {"code": "rate_limited"}, retry_after=7)
        assert err.retry_after == 7
        assert err.to_dict()["retry_after"] == 7

    def test_factories(self) -> None:
        assert RenderScreenshotError.invalid_url("nope").message == "Invalid URL provided: nope"
        assert RenderScreenshotError.invalid_request("bad").http_status == 400
        assert RenderScreenshotError.unauthorized().http_status == 401
        assert RenderScreenshotError.rate_limited(3).retry_after == 3
        assert RenderScreenshotError.timeout().http_status == 408
        assert RenderScreenshotError.internal().message == "An internal error occurred"

    def test_to_dict_includes_status_and_retryable(self) -> None:
        payload = RenderScreenshotError.timeout().to_dict()
        assert payload["http_status"] == 408
        assert payload["retryable"] is True
        assert "retry_after" not in payload

    def test_pickle_round_trip(self) -> None:
        err = RenderScreenshotError.rate_limited(retry_after=5)
        restored = pickle.loads(pickle.dumps(err))
        assert type(restored) is RenderScreenshotError
        assert restored.http_status == 429
        assert restored.retry_after == 5
        assert restored.retryable is True
        assert restored.message == err.message

    def test_is_base_error(self) -> None:
        with pytest.raises(BaseError):
            raise RenderScreenshotError.unauthorized()


class TestWebhookPayloadError:
    def test_field_recorded(self) -> None:
        err = WebhookPayloadError("bad timestamp", field="timestamp")
        assert err.field == "timestamp"
        assert err.code == "webhook_payload_error"
