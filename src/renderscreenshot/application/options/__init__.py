"""Application options – the TakeOptions builder and option vocabularies."""
from renderscreenshot.application.options.literals import (
    BlockableResource,
    Device,
    ImageFormat,
    MediaType,
    PdfPaperSize,
    Preset,
    StorageAcl,
    WaitCondition,
)
from renderscreenshot.application.options.take_options import (
    SIGNED_URL_FIELDS,
    Geolocation,
    TakeOptions,
    TakeOptionsConfig,
)

__all__ = [
    "BlockableResource",
    "Device",
    "Geolocation",
    "ImageFormat",
    "MediaType",
    "PdfPaperSize",
    "Preset",
    "SIGNED_URL_FIELDS",
    "StorageAcl",
    "TakeOptions",
    "TakeOptionsConfig",
    "WaitCondition",
]
