"""
圖片指令

- get_image_info: 分析圖片
- convert_image: 格式轉換（可選縮放）
- list_supported_formats: 支援的格式
- remove_background: 色鍵去背並輸出透明 PNG
"""

import logging
from pathlib import Path

from pixelsmith.core.progress import ProgressReporter
from pixelsmith.data_model import (
    BackgroundRemovalOptions,
    ConversionOptions,
    ConversionResult,
    ImageInfo,
)
from pixelsmith.features.background_removal import run_background_removal
from pixelsmith.features.image_conversion import (
    analyze_image,
    list_formats,
    run_conversion,
)

from .base import logged_command


logger = logging.getLogger(__name__)


@logged_command("Unable to analyze image")
async def get_image_info(path: str | Path) -> ImageInfo:
    """
    取得圖片資訊

    Args:
        path: 圖片路徑

    Returns:
        圖片資訊
    """
    logger.info("📷 Analyzing image: %s", path)
    info = await analyze_image(Path(path))
    logger.info("✅ Image analyzed: %dx%d pixels", info.width, info.height)
    return info


@logged_command("Conversion failed")
async def convert_image(
    input_path: str | Path,
    output_path: str | Path,
    options: ConversionOptions,
    progress: ProgressReporter | None = None,
) -> ConversionResult:
    """
    轉換圖片格式

    Args:
        input_path: 輸入圖片路徑
        output_path: 輸出圖片路徑
        options: 轉換設定
        progress: 進度回報（每次呼叫各自一個）

    Returns:
        轉換結果
    """
    logger.info("🔄 Converting: %s -> %s", input_path, output_path)
    result = await run_conversion(Path(input_path), Path(output_path), options, progress)
    logger.info("✅ Conversion done: -%.1f%% size", result.size_reduction_percent)
    return result


async def list_supported_formats() -> list[str]:
    """取得支援的圖片格式"""
    return list_formats()


@logged_command("Background removal failed")
async def remove_background(
    input_path: str | Path,
    output_path: str | Path,
    options: BackgroundRemovalOptions,
    progress: ProgressReporter | None = None,
) -> ConversionResult:
    """
    移除圖片背景並匯出透明 PNG

    Args:
        input_path: 輸入圖片路徑
        output_path: 輸出圖片路徑
        options: 背景移除設定
        progress: 進度回報（每次呼叫各自一個）

    Returns:
        轉換結果（輸出格式固定為 PNG）
    """
    logger.info("🎨 Removing background: %s -> %s", input_path, output_path)
    return await run_background_removal(
        Path(input_path), Path(output_path), options, progress
    )
