"""Config settings – Settings base class and ClientSettings."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from renderscreenshot.config.validation import InvalidSettingValueError

DEFAULT_BASE_URL = "https://api.renderscreenshot.com"
DEFAULT_TIMEOUT = 30.0
DEFAULT_WEBHOOK_TOLERANCE = 300


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class ClientSettings(Settings):
    """Everything a :class:`~renderscreenshot.Client` and webhook verifier need.

    Loaded from ``RENDERSCREENSHOT_*`` environment variables by
    :class:`~renderscreenshot.config.settings.EnvSettingsLoader`.
    """

    _prefix: ClassVar[str] = "RENDERSCREENSHOT"

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    max_retries: int = 0
    webhook_secret: str = ""
    webhook_tolerance: int = DEFAULT_WEBHOOK_TOLERANCE

    def _validate(self) -> None:
        if not self.api_key:
            raise InvalidSettingValueError("api_key", self.api_key, "must not be empty")
        if self.timeout <= 0:
            raise InvalidSettingValueError("timeout", self.timeout, "must be positive")
        if self.max_retries < 0:
            raise InvalidSettingValueError("max_retries", self.max_retries, "must be >= 0")
        if self.webhook_tolerance < 0:
            raise InvalidSettingValueError(
                "webhook_tolerance", self.webhook_tolerance, "must be >= 0"
            )
        self.base_url = self.base_url.rstrip("/")

    def __repr__(self) -> str:
        # secrets stay out of reprs and tracebacks
        return (
            f"ClientSettings(api_key='***', base_url={self.base_url!r}, "
            f"timeout={self.timeout!r}, max_retries={self.max_retries!r}, "
            f"webhook_secret={'***' if self.webhook_secret else ''!r}, "
            f"webhook_tolerance={self.webhook_tolerance!r})"
        )


__all__ = [
    "ClientSettings",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT",
    "DEFAULT_WEBHOOK_TOLERANCE",
    "Settings",
]
