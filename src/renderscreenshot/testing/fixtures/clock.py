"""Testing fixtures – fake_clock and webhook_secret."""
from __future__ import annotations

try:
    import pytest

    @pytest.fixture
    def fake_clock():
        """Pytest fixture: returns a FakeClock pinned to 2024-01-18 12:00 UTC."""
        from renderscreenshot.testing.fakes import FakeClock
        return FakeClock()

    @pytest.fixture
    def webhook_secret() -> str:
        return "whsec_test_secret_key"

except ImportError:
    pass

__all__ = ["fake_clock", "webhook_secret"]
