"""
格式編碼模組

將圖片序列化為目標格式；只有 JPEG 使用品質參數
"""

import asyncio
import logging
from pathlib import Path

from PIL import Image

from pixelsmith.core.files import create_directory, file_size
from pixelsmith.data_model import DEFAULT_JPEG_QUALITY, ImageFormat
from pixelsmith.errors import SystemFailureError, ValidationError


logger = logging.getLogger(__name__)

# 輸出格式名稱（小寫）對應
_FORMAT_NAMES: dict[str, ImageFormat] = {
    "jpeg": ImageFormat.JPEG,
    "jpg": ImageFormat.JPEG,
    "png": ImageFormat.PNG,
    "webp": ImageFormat.WEBP,
    "bmp": ImageFormat.BMP,
    "tiff": ImageFormat.TIFF,
    "gif": ImageFormat.GIF,
}

JPEG_QUALITY_MIN = 1
JPEG_QUALITY_MAX = 100

# Pillow 可直接寫入的模式；未列出的格式由 Pillow 自行轉換
_WRITABLE_MODES: dict[ImageFormat, frozenset[str]] = {
    ImageFormat.PNG: frozenset({"1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA"}),
    ImageFormat.BMP: frozenset({"1", "L", "P", "RGB", "RGBA"}),
}

# 單通道高位元深度模式
_HIGH_DEPTH_MODES = frozenset({"I", "I;16", "I;16B", "I;16L", "F"})


def list_formats() -> list[str]:
    """回傳支援的格式名稱（固定順序）"""
    return [fmt.value for fmt in ImageFormat]


def parse_output_format(name: str) -> ImageFormat:
    """
    解析輸出格式名稱

    Args:
        name: 格式名稱（不分大小寫）

    Returns:
        格式標籤

    Raises:
        ValidationError: 不支援的格式
    """
    fmt = _FORMAT_NAMES.get(name.strip().lower())
    if fmt is None:
        raise ValidationError(f"Unsupported format: {name}")
    return fmt


def resolve_quality(quality: int | None) -> int:
    """JPEG 品質：省略時為 85，並限制在 1-100"""
    if quality is None:
        return DEFAULT_JPEG_QUALITY
    return max(JPEG_QUALITY_MIN, min(JPEG_QUALITY_MAX, quality))


def normalize_mode(image: Image.Image, fmt: ImageFormat) -> Image.Image:
    """
    轉換為目標格式可寫入的模式

    JPEG 一律轉為 RGB（捨棄 alpha）；其他格式只在 Pillow 無法直接寫入時轉換，
    有透明資訊時轉為 RGBA，高位元深度單通道轉為 L，其餘轉為 RGB

    Args:
        image: 圖片
        fmt: 輸出格式

    Returns:
        可寫入的圖片（不需轉換時為原物件）
    """
    if fmt is ImageFormat.JPEG:
        return image if image.mode == "RGB" else image.convert("RGB")

    allowed = _WRITABLE_MODES.get(fmt)
    if allowed is None or image.mode in allowed:
        return image

    if image.mode in _HIGH_DEPTH_MODES:
        target = "L"
    elif image.has_transparency_data:
        target = "RGBA"
    else:
        target = "RGB"
    logger.debug("Converting mode %s to %s for %s", image.mode, target, fmt)
    return image.convert(target)


def encode_image(
    image: Image.Image,
    path: Path,
    fmt: ImageFormat,
    quality: int | None = None,
) -> None:
    """
    將圖片寫入檔案

    失敗時輸出檔案可能已部分寫入

    Args:
        image: 圖片
        path: 輸出路徑（父資料夾須已存在）
        fmt: 輸出格式
        quality: JPEG 品質，其他格式忽略

    Raises:
        SystemFailureError: 編碼或寫入失敗
    """
    params: dict[str, int] = {}
    if fmt is ImageFormat.JPEG:
        params["quality"] = resolve_quality(quality)

    try:
        normalize_mode(image, fmt).save(path, format=fmt.pillow_name, **params)
    except (OSError, ValueError) as exc:
        raise SystemFailureError(f"{fmt} encoding error: {exc}") from exc

    logger.debug("Encoded %s as %s", path, fmt)


async def encode_image_async(
    image: Image.Image,
    path: Path,
    fmt: ImageFormat,
    quality: int | None = None,
) -> None:
    """encode_image 的非同步版本，在 worker thread 中執行"""
    await asyncio.to_thread(encode_image, image, path, fmt, quality)


async def save_image(
    image: Image.Image,
    path: Path,
    fmt: ImageFormat,
    quality: int | None = None,
) -> int:
    """
    建立缺少的父資料夾、寫入圖片，並重新讀取輸出大小

    Args:
        image: 圖片
        path: 輸出路徑
        fmt: 輸出格式
        quality: JPEG 品質

    Returns:
        輸出檔案大小（位元組）

    Raises:
        SystemFailureError: 建立資料夾、編碼或讀取輸出檔案失敗
    """
    await create_directory(path.parent)
    await encode_image_async(image, path, fmt, quality)
    return await file_size(path, what="output file")
