"""Config validation – errors raised while building ClientSettings."""
from __future__ import annotations

from renderscreenshot.kernel.errors import BaseError

_MASK = "***"


def _is_secret(setting_name: str) -> bool:
    name = setting_name.lower()
    return name.endswith("key") or "secret" in name


class ConfigError(BaseError):
    """Settings could not be loaded or failed validation."""
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A required setting (usually an environment variable) is absent."""
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(
            f"Required setting '{setting_name}' is missing",
            detail={"setting": setting_name},
        )
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting is present but unusable.

    Values of key and secret settings are masked in the message and detail.
    """
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        shown = _MASK if _is_secret(setting_name) and value else repr(value)
        super().__init__(
            f"Setting '{setting_name}' has invalid value {shown}: {reason}",
            detail={"setting": setting_name, "reason": reason},
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
