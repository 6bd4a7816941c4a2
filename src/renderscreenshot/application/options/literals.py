"""Options – accepted values for enumerated screenshot options."""
from __future__ import annotations

from typing import Literal

ImageFormat = Literal["png", "jpeg", "webp", "pdf"]
WaitCondition = Literal["load", "networkidle", "domcontentloaded"]
BlockableResource = Literal["font", "media", "image", "script", "stylesheet"]
MediaType = Literal["screen", "print"]
StorageAcl = Literal["public-read", "private"]

Preset = Literal[
    "og_card",
    "twitter_card",
    "twitter_card_large",
    "full_page",
    "mobile",
    "mobile_landscape",
    "desktop_hd",
    "desktop_4k",
    "link_preview",
    "pdf_document",
]

Device = Literal[
    "iphone_14_pro",
    "iphone_14",
    "iphone_se",
    "pixel_7",
    "pixel_7_pro",
    "samsung_galaxy_s23",
    "ipad_pro_12",
    "ipad_air",
    "macbook_pro_16",
    "macbook_air_15",
    "imac_24",
    "desktop_1080p",
    "desktop_1440p",
    "desktop_4k",
    "surface_pro",
]

PdfPaperSize = Literal["a0", "a1", "a2", "a3", "a4", "a5", "a6", "letter", "legal", "tabloid"]

__all__ = [
    "BlockableResource",
    "Device",
    "ImageFormat",
    "MediaType",
    "PdfPaperSize",
    "Preset",
    "StorageAcl",
    "WaitCondition",
]
