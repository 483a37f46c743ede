"""
背景移除管線

來源 → 色鍵去背 → (邊緣柔化 →) PNG 編碼。檢查點：
20 檔案驗證 → 40 載入 → 50 顏色解析 → 80 去背 → 90 柔化/略過 → 100 儲存
"""

import asyncio
import logging
from pathlib import Path

from pixelsmith.core.files import file_exists, file_size, format_file_size
from pixelsmith.core.progress import ProgressReporter, create_image_progress
from pixelsmith.data_model import (
    BackgroundRemovalOptions,
    ConversionResult,
    ImageFormat,
    size_reduction_percent,
)
from pixelsmith.errors import PixelsmithError, ValidationError
from pixelsmith.features.image_conversion.encoder import save_image
from pixelsmith.features.image_conversion.source import (
    detect_format,
    from_pixel_buffer,
    load_image,
    to_pixel_buffer,
)

from .chroma_key import parse_hex_color, remove_key_color
from .edge_softening import soften_edges


logger = logging.getLogger(__name__)

# 此管線唯一支援透明度的輸出格式
OUTPUT_FORMAT = ImageFormat.PNG


async def run_background_removal(
    input_path: Path,
    output_path: Path,
    options: BackgroundRemovalOptions,
    progress: ProgressReporter | None = None,
) -> ConversionResult:
    """
    移除圖片背景並輸出透明 PNG

    Args:
        input_path: 輸入圖片路徑
        output_path: 輸出圖片路徑（不論副檔名皆以 PNG 編碼）
        options: 背景移除設定
        progress: 進度回報，預設為 logging 實作

    Returns:
        轉換結果（output_format 固定為 PNG）

    Raises:
        ValidationError: 輸入不存在、副檔名不支援或顏色字串格式錯誤
        DataError: 無法解碼
        SystemFailureError: I/O 失敗
    """
    progress = progress or create_image_progress("Background removal")
    try:
        return await _remove_background(input_path, output_path, options, progress)
    except PixelsmithError as exc:
        progress.finish_error(exc.message)
        raise


async def _remove_background(
    input_path: Path,
    output_path: Path,
    options: BackgroundRemovalOptions,
    progress: ProgressReporter,
) -> ConversionResult:
    progress.update(20, "Checking file...")
    if not await file_exists(input_path):
        raise ValidationError(f"Source file does not exist: {input_path}")
    input_format = detect_format(input_path)
    size_before = await file_size(input_path, what="source file")

    progress.update(40, "Loading image...")
    image = await load_image(input_path)
    pixels = await asyncio.to_thread(to_pixel_buffer, image)

    progress.update(50, "Parsing background color...")
    key = parse_hex_color(options.key_color)

    progress.update(80, "Removing background...")
    pixels = await asyncio.to_thread(remove_key_color, pixels, key, options.tolerance)

    if options.soften_edges:
        progress.update(90, "Softening edges...")
        pixels = await asyncio.to_thread(soften_edges, pixels, options.soften_radius)
    else:
        progress.update(90, "Finalizing...")

    progress.update(100, "Saving PNG...")
    result_image = await asyncio.to_thread(from_pixel_buffer, pixels)
    size_after = await save_image(result_image, output_path, OUTPUT_FORMAT)

    reduction = size_reduction_percent(size_before, size_after)
    progress.finish_success(
        f"Background removed: {format_file_size(size_before)} → transparent PNG"
    )

    return ConversionResult(
        success=True,
        input_path=str(input_path),
        output_path=str(output_path),
        input_format=input_format,
        output_format=OUTPUT_FORMAT,
        size_before=size_before,
        size_after=size_after,
        size_reduction_percent=reduction,
        message=f"Background removal succeeded: {input_format} -> transparent PNG",
    )
