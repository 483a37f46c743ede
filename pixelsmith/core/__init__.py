"""
核心模組 - 進度回報與檔案原語

批次處理器位於 pixelsmith.core.processor（依賴功能模組，不在此匯入）
"""

from .files import create_directory, file_exists, file_size, format_file_size
from .progress import (
    BatchProgressBar,
    LoggingProgressReporter,
    ProgressReporter,
    RichProgressReporter,
    create_image_progress,
)


__all__ = [
    "BatchProgressBar",
    "LoggingProgressReporter",
    "ProgressReporter",
    "RichProgressReporter",
    "create_image_progress",
    "create_directory",
    "file_exists",
    "file_size",
    "format_file_size",
]
