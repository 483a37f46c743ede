"""
資料模型模組

提供應用程式的核心資料結構，使用 Pydantic 進行驗證
"""

from .batch import BatchJob, BatchOperation, BatchResult
from .core import (
    DEFAULT_JPEG_QUALITY,
    EXTENSION_FORMATS,
    SUPPORTED_EXTENSIONS,
    BackgroundRemovalOptions,
    ConversionOptions,
    ConversionResult,
    ImageFormat,
    ImageInfo,
    UInt8,
    is_supported_image,
    size_reduction_percent,
)

__all__ = [
    "BackgroundRemovalOptions",
    "BatchJob",
    "BatchOperation",
    "BatchResult",
    "ConversionOptions",
    "ConversionResult",
    "DEFAULT_JPEG_QUALITY",
    "EXTENSION_FORMATS",
    "ImageFormat",
    "ImageInfo",
    "SUPPORTED_EXTENSIONS",
    "UInt8",
    "is_supported_image",
    "size_reduction_percent",
]
