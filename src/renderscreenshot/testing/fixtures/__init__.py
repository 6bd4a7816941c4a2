"""Testing fixtures – pytest fixtures for fake doubles."""
try:
    import pytest  # noqa: F401

    from renderscreenshot.testing.fixtures.clock import fake_clock, webhook_secret

except ImportError:
    pass

__all__ = ["fake_clock", "webhook_secret"]
