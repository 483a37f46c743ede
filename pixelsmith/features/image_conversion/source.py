"""
圖片來源模組

負責解碼輸入檔案、依副檔名判斷格式，並產生 RGBA 像素緩衝區
"""

import asyncio
import logging
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from pixelsmith.core.files import file_exists, file_size
from pixelsmith.data_model import EXTENSION_FORMATS, ImageFormat, ImageInfo
from pixelsmith.errors import DataError, ValidationError


logger = logging.getLogger(__name__)


def detect_format(path: Path) -> ImageFormat:
    """
    依副檔名判斷格式（不分大小寫），不參考解碼器的內容偵測

    Args:
        path: 檔案路徑

    Returns:
        格式標籤

    Raises:
        ValidationError: 副檔名無法辨識或沒有副檔名
    """
    suffix = path.suffix
    if not suffix or suffix == ".":
        raise ValidationError("Cannot determine the file format")

    ext = suffix[1:]
    fmt = EXTENSION_FORMATS.get(ext.lower())
    if fmt is None:
        raise ValidationError(f"Unrecognized file extension: {ext}")
    return fmt


def _decode(path: Path) -> Image.Image:
    with Image.open(path) as img:
        img.load()
        # 讀取多影格 GIF/TIFF 時只保留第一格
        return img.copy()


async def load_image(path: Path) -> Image.Image:
    """
    完整解碼圖片

    Args:
        path: 圖片路徑

    Returns:
        解碼後的圖片

    Raises:
        DataError: 無法解碼
    """
    try:
        return await asyncio.to_thread(_decode, path)
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        ValueError,
    ) as exc:
        raise DataError(f"Unable to load image: {exc}") from exc


def to_pixel_buffer(image: Image.Image) -> np.ndarray:
    """
    轉換為 RGBA 像素緩衝區

    Args:
        image: 任意模式的圖片

    Returns:
        形狀 (height, width, 4) 的 uint8 陣列（可寫入的獨立副本）
    """
    rgba = image if image.mode == "RGBA" else image.convert("RGBA")
    return np.array(rgba, dtype=np.uint8)


def from_pixel_buffer(pixels: np.ndarray) -> Image.Image:
    """由 RGBA 像素緩衝區建立圖片"""
    return Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8))


async def analyze_image(path: Path) -> ImageInfo:
    """
    分析圖片資訊

    Args:
        path: 圖片路徑

    Returns:
        圖片資訊

    Raises:
        DataError: 檔案不存在或無法解碼
        SystemFailureError: 無法讀取中繼資料
        ValidationError: 副檔名無法辨識
    """
    if not await file_exists(path):
        raise DataError("Image file does not exist")

    size_bytes = await file_size(path, what="file metadata")
    image = await load_image(path)
    fmt = detect_format(path)

    width, height = image.size
    logger.debug("Analyzed %s: %dx%d %s", path.name, width, height, fmt)

    return ImageInfo(
        name=path.name,
        path=str(path),
        format=fmt,
        width=width,
        height=height,
        size_bytes=size_bytes,
    )
