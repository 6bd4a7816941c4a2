"""Testing fakes – in-memory doubles for kernel ports."""
from renderscreenshot.testing.fakes.clock import FakeClock

__all__ = ["FakeClock"]
