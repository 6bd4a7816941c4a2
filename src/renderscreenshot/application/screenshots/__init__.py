"""Application screenshots – API client, cache management and response models."""
from renderscreenshot.application.screenshots.models import (
    BatchRequestItem,
    BatchResponse,
    BatchResponseItem,
    DeviceInfo,
    PresetInfo,
    PurgeResult,
    ScreenshotResponse,
)
from renderscreenshot.application.screenshots.cache import CacheManager
from renderscreenshot.application.screenshots.client import Client

__all__ = [
    "BatchRequestItem",
    "BatchResponse",
    "BatchResponseItem",
    "CacheManager",
    "Client",
    "DeviceInfo",
    "PresetInfo",
    "PurgeResult",
    "ScreenshotResponse",
]
