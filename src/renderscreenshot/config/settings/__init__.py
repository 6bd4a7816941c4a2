"""Config settings – 12-factor env-based configuration."""
from renderscreenshot.config.settings.base import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    DEFAULT_WEBHOOK_TOLERANCE,
    ClientSettings,
    Settings,
)
from renderscreenshot.config.settings.loaders import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    SettingsLoader,
)

__all__ = [
    "ClientSettings",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT",
    "DEFAULT_WEBHOOK_TOLERANCE",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "Settings",
    "SettingsLoader",
]
