"""Observability – structured logging helpers."""
from renderscreenshot.observability.logging.factory import JsonLoggerFactory, configure_logging
from renderscreenshot.observability.logging.filters import DEFAULT_SENSITIVE_FIELDS, SensitiveFieldsFilter
from renderscreenshot.observability.logging.processors import get_logger

__all__ = [
    "DEFAULT_SENSITIVE_FIELDS",
    "JsonLoggerFactory",
    "SensitiveFieldsFilter",
    "configure_logging",
    "get_logger",
]
