"""Testing support – fakes, fixtures and signed webhook builders.

Import in your ``conftest.py``::

    pytest_plugins = ["renderscreenshot.testing.fixtures"]
"""

from renderscreenshot.testing.fakes import FakeClock
from renderscreenshot.testing.webhooks import signed_webhook

__all__ = ["FakeClock", "signed_webhook"]
