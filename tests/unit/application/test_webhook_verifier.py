"""Unit tests – webhook signature and freshness verification."""
from __future__ import annotations

import hashlib
import hmac
import json

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from renderscreenshot.application.webhooks import (
    InMemoryReplayStore,
    WebhookSigner,
    WebhookVerifier,
    replay_key,
    verify_webhook,
)
from renderscreenshot.config import ClientSettings, MissingRequiredSettingError
from renderscreenshot.kernel.time import FrozenClock
from renderscreenshot.testing import FakeClock, signed_webhook

SECRET = "whsec_test_secret_key"
NOW = 1705579200  # 2024-01-18T12:00:00Z
PAYLOAD = json.dumps(
    {
        "event": "screenshot.completed",
        "id": "req_abc123",
        "timestamp": "2024-01-18T12:00:00Z",
        "data": {"url": "https://example.com", "screenshot_url": "https://cdn.example/x.png"},
    }
)


def _sign(payload: str | bytes, timestamp: str | int, secret: str = SECRET) -> str:
    return WebhookSigner.sign(payload, timestamp, secret)


# ---------------------------------------------------------------------------
# WebhookSigner
# ---------------------------------------------------------------------------


class TestWebhookSigner:
    def test_signature_format(self) -> None:
        body = '{"a":1}'
        expected = hmac.new(
            SECRET.encode(), f"{NOW}.{body}".encode(), hashlib.sha256
        ).hexdigest()
        assert WebhookSigner.sign(body, str(NOW), SECRET) == f"sha256={expected}"

    def test_int_and_str_timestamp_agree(self) -> None:
        assert WebhookSigner.sign("x", NOW, SECRET) == WebhookSigner.sign("x", str(NOW), SECRET)

    def test_str_and_utf8_bytes_agree(self) -> None:
        body = '{"name":"café"}'
        assert WebhookSigner.sign(body, NOW, SECRET) == WebhookSigner.sign(
            body.encode("utf-8"), NOW, SECRET
        )

    def test_matches_tolerates_length_mismatch(self) -> None:
        assert WebhookSigner.matches("sha256=abc", "sha256=ab") is False
        assert WebhookSigner.matches("sha256=abc", "sha256=abc") is True

    def test_matches_lone_surrogate_is_false(self) -> None:
        assert WebhookSigner.matches("sha256=abc", "sha256=\udcff") is False


# ---------------------------------------------------------------------------
# verify_webhook
# ---------------------------------------------------------------------------


class TestVerifyWebhook:
    def test_completed_delivery_accepted_now_rejected_an_hour_later(self) -> None:
        body = '{"event":"screenshot.completed","id":"req_abc123"}'
        digest = hmac.new(
            b"whsec_test_secret_key",
            b'1705579200.{"event":"screenshot.completed","id":"req_abc123"}',
            hashlib.sha256,
        ).hexdigest()
        sig = f"sha256={digest}"

        assert verify_webhook(body, sig, "1705579200", SECRET, clock=FrozenClock.at_epoch(NOW)) is True
        assert (
            verify_webhook(body, sig, "1705579200", SECRET, clock=FrozenClock.at_epoch(NOW + 3600))
            is False
        )

    def test_valid_delivery(self) -> None:
        sig = _sign(PAYLOAD, NOW)
        assert verify_webhook(PAYLOAD, sig, str(NOW), SECRET, clock=FakeClock()) is True

    def test_bytes_payload(self) -> None:
        body = PAYLOAD.encode()
        sig = _sign(body, NOW)
        assert verify_webhook(body, sig, str(NOW), SECRET, clock=FakeClock()) is True

    @pytest.mark.parametrize("offset", [-300, -299, 0, 299, 300])
    def test_inside_window_either_direction(self, offset: int) -> None:
        ts = str(NOW + offset)
        assert verify_webhook(PAYLOAD, _sign(PAYLOAD, ts), ts, SECRET, clock=FakeClock()) is True

    @pytest.mark.parametrize("offset", [-301, 301, -3600, 86400])
    def test_outside_window_rejected(self, offset: int) -> None:
        ts = str(NOW + offset)
        assert verify_webhook(PAYLOAD, _sign(PAYLOAD, ts), ts, SECRET, clock=FakeClock()) is False

    def test_fractional_now_is_floored(self) -> None:
        clock = FrozenClock.at_epoch(NOW + 300.9)
        assert verify_webhook(PAYLOAD, _sign(PAYLOAD, NOW), str(NOW), SECRET, clock=clock) is True

    def test_custom_tolerance(self) -> None:
        ts = str(NOW - 30)
        sig = _sign(PAYLOAD, ts)
        assert verify_webhook(PAYLOAD, sig, ts, SECRET, clock=FakeClock(), tolerance=30) is True
        assert verify_webhook(PAYLOAD, sig, ts, SECRET, clock=FakeClock(), tolerance=29) is False

    def test_tampered_payload_rejected(self) -> None:
        sig = _sign(PAYLOAD, NOW)
        tampered = PAYLOAD.replace("example.com", "evil.com")
        assert verify_webhook(tampered, sig, str(NOW), SECRET, clock=FakeClock()) is False

    def test_reserialized_payload_rejected(self) -> None:
        sig = _sign(PAYLOAD, NOW)
        reformatted = json.dumps(json.loads(PAYLOAD), indent=2)
        assert verify_webhook(reformatted, sig, str(NOW), SECRET, clock=FakeClock()) is False

    def test_timestamp_swap_rejected(self) -> None:
        sig = _sign(PAYLOAD, NOW)
        assert verify_webhook(PAYLOAD, sig, str(NOW + 1), SECRET, clock=FakeClock()) is False

    def test_wrong_secret_rejected(self) -> None:
        sig = _sign(PAYLOAD, NOW, secret="whsec_other")
        assert verify_webhook(PAYLOAD, sig, str(NOW), SECRET, clock=FakeClock()) is False

    def test_signature_without_prefix_rejected(self) -> None:
        sig = _sign(PAYLOAD, NOW).removeprefix("sha256=")
        assert verify_webhook(PAYLOAD, sig, str(NOW), SECRET, clock=FakeClock()) is False

    def test_uppercase_hex_rejected(self) -> None:
        sig = "sha256=" + _sign(PAYLOAD, NOW).removeprefix("sha256=").upper()
        assert verify_webhook(PAYLOAD, sig, str(NOW), SECRET, clock=FakeClock()) is False

    @pytest.mark.parametrize(
        "payload,signature,timestamp,secret",
        [
            ("", "sha256=x", str(NOW), SECRET),
            (b"", "sha256=x", str(NOW), SECRET),
            (PAYLOAD, "", str(NOW), SECRET),
            (PAYLOAD, "sha256=x", "", SECRET),
            (PAYLOAD, "sha256=x", str(NOW), ""),
        ],
    )
    def test_missing_fields_rejected(
        self, payload: str | bytes, signature: str, timestamp: str, secret: str
    ) -> None:
        assert verify_webhook(payload, signature, timestamp, secret, clock=FakeClock()) is False

    @pytest.mark.parametrize(
        "timestamp",
        [
            "abc",
            "1705579200abc",
            " 1705579200",
            "1705579200.5",
            "1.7e9",
            "+1705579200",
            "9" * 19,
            "9" * 5000,
        ],
    )
    def test_malformed_timestamp_rejected(self, timestamp: str) -> None:
        sig = _sign(PAYLOAD, timestamp)
        assert verify_webhook(PAYLOAD, sig, timestamp, SECRET, clock=FakeClock()) is False

    @pytest.mark.parametrize("signature", ["sha256=\udcff", "\ud800", "sha256=" + "a" * 63 + "\udcff"])
    def test_lone_surrogate_signature_rejected(self, signature: str) -> None:
        assert verify_webhook(PAYLOAD, signature, str(NOW), SECRET, clock=FakeClock()) is False

    def test_lone_surrogate_payload_rejected(self) -> None:
        sig = _sign(PAYLOAD, NOW)
        assert verify_webhook(PAYLOAD + "\udcff", sig, str(NOW), SECRET, clock=FakeClock()) is False

    def test_wall_clock_default(self) -> None:
        headers = signed_webhook(PAYLOAD, SECRET)
        assert verify_webhook(
            PAYLOAD, headers["X-Webhook-Signature"], headers["X-Webhook-Timestamp"], SECRET
        ) is True

    @given(body=st.binary(min_size=1, max_size=256), offset=st.integers(min_value=-300, max_value=300))
    @settings(max_examples=100)
    def test_any_body_signed_in_window_verifies(self, body: bytes, offset: int) -> None:
        ts = str(NOW + offset)
        assert verify_webhook(body, _sign(body, ts), ts, SECRET, clock=FakeClock()) is True

    @given(body=st.binary(min_size=1, max_size=256), flip=st.integers(min_value=0, max_value=255))
    @settings(max_examples=100)
    def test_single_byte_change_rejected(self, body: bytes, flip: int) -> None:
        sig = _sign(body, NOW)
        index = flip % len(body)
        tampered = body[:index] + bytes([body[index] ^ 0x01]) + body[index + 1 :]
        assert verify_webhook(tampered, sig, str(NOW), SECRET, clock=FakeClock()) is False


# ---------------------------------------------------------------------------
# WebhookVerifier
# ---------------------------------------------------------------------------


class TestWebhookVerifier:
    def test_verify_request_reads_headers(self) -> None:
        verifier = WebhookVerifier(SECRET, clock=FakeClock())
        headers = signed_webhook(PAYLOAD, SECRET, NOW)
        assert verifier.verify_request(PAYLOAD, headers) is True

    def test_verify_request_lowercase_headers(self) -> None:
        verifier = WebhookVerifier(SECRET, clock=FakeClock())
        headers = {k.lower(): v for k, v in signed_webhook(PAYLOAD, SECRET, NOW).items()}
        assert verifier.verify_request(PAYLOAD, headers) is True

    def test_verify_request_missing_headers(self) -> None:
        verifier = WebhookVerifier(SECRET, clock=FakeClock())
        assert verifier.verify_request(PAYLOAD, {}) is False

    def test_oversized_timestamp_header_rejected(self) -> None:
        verifier = WebhookVerifier(SECRET, clock=FakeClock(), replay_store=InMemoryReplayStore(FakeClock()))
        headers = {"X-Webhook-Signature": "sha256=" + "0" * 64, "X-Webhook-Timestamp": "9" * 4301}
        assert verifier.verify_request(PAYLOAD, headers) is False

    def test_negative_tolerance_rejected(self) -> None:
        with pytest.raises(ValueError):
            WebhookVerifier(SECRET, tolerance=-1)

    def test_tolerance_property(self) -> None:
        assert WebhookVerifier(SECRET).tolerance == 300
        assert WebhookVerifier(SECRET, tolerance=60).tolerance == 60

    def test_repr_hides_secret(self) -> None:
        assert SECRET not in repr(WebhookVerifier(SECRET))

    def test_from_settings(self) -> None:
        cfg = ClientSettings(api_key="rs_live_x", webhook_secret=SECRET, webhook_tolerance=60)
        verifier = WebhookVerifier.from_settings(cfg, clock=FakeClock())
        assert verifier.tolerance == 60
        ts = str(NOW - 61)
        assert verifier.verify(PAYLOAD, _sign(PAYLOAD, ts), ts) is False

    def test_from_settings_requires_secret(self) -> None:
        with pytest.raises(MissingRequiredSettingError):
            WebhookVerifier.from_settings(ClientSettings(api_key="rs_live_x"))


class TestReplayProtection:
    def test_second_delivery_rejected(self) -> None:
        clock = FakeClock()
        verifier = WebhookVerifier(SECRET, clock=clock, replay_store=InMemoryReplayStore(clock))
        headers = signed_webhook(PAYLOAD, SECRET, NOW)
        assert verifier.verify_request(PAYLOAD, headers) is True
        assert verifier.verify_request(PAYLOAD, headers) is False

    def test_distinct_deliveries_both_accepted(self) -> None:
        clock = FakeClock()
        verifier = WebhookVerifier(SECRET, clock=clock, replay_store=InMemoryReplayStore(clock))
        assert verifier.verify_request(PAYLOAD, signed_webhook(PAYLOAD, SECRET, NOW)) is True
        assert verifier.verify_request(PAYLOAD, signed_webhook(PAYLOAD, SECRET, NOW - 1)) is True

    def test_failed_verification_not_remembered(self) -> None:
        clock = FakeClock()
        store = InMemoryReplayStore(clock)
        verifier = WebhookVerifier(SECRET, clock=clock, replay_store=store)
        assert verifier.verify(PAYLOAD, "sha256=bad", str(NOW)) is False
        assert len(store) == 0

    def test_entries_pruned_after_window(self) -> None:
        clock = FakeClock()
        store = InMemoryReplayStore(clock)
        assert store.remember(replay_key(str(NOW), "sha256=a"), NOW + 300) is True
        assert len(store) == 1
        clock.advance(seconds=301)
        assert store.remember(replay_key(str(NOW + 301), "sha256=b"), NOW + 601) is True
        assert len(store) == 1

    def test_replay_key_format(self) -> None:
        assert replay_key("1705579200", "sha256=ab") == "1705579200:sha256=ab"
