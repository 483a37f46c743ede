"""
格式轉換管線

來源 → (縮放 →) 編碼，每個階段前後回報固定檢查點：
20 檔案驗證 → 40 載入 → 60 縮放/略過 → 70 格式解析 → 90 儲存 → 100 完成
"""

import logging
from pathlib import Path

from pixelsmith.core.files import file_exists, file_size, format_file_size
from pixelsmith.core.progress import ProgressReporter, create_image_progress
from pixelsmith.data_model import (
    ConversionOptions,
    ConversionResult,
    size_reduction_percent,
)
from pixelsmith.errors import PixelsmithError, ValidationError

from .encoder import parse_output_format, save_image
from .resizer import resize_image_async
from .source import detect_format, load_image


logger = logging.getLogger(__name__)


async def run_conversion(
    input_path: Path,
    output_path: Path,
    options: ConversionOptions,
    progress: ProgressReporter | None = None,
) -> ConversionResult:
    """
    轉換單張圖片

    失敗時進度以錯誤結束一次後再拋出例外；此時輸出檔案狀態未定義

    Args:
        input_path: 輸入圖片路徑
        output_path: 輸出圖片路徑
        options: 轉換設定
        progress: 進度回報，預設為 logging 實作

    Returns:
        轉換結果

    Raises:
        ValidationError: 輸入不存在、副檔名或輸出格式不支援
        DataError: 無法解碼
        SystemFailureError: I/O 失敗
    """
    progress = progress or create_image_progress("Image conversion")
    try:
        return await _convert(input_path, output_path, options, progress)
    except PixelsmithError as exc:
        progress.finish_error(exc.message)
        raise


async def _convert(
    input_path: Path,
    output_path: Path,
    options: ConversionOptions,
    progress: ProgressReporter,
) -> ConversionResult:
    progress.update(20, "Checking file...")
    if not await file_exists(input_path):
        raise ValidationError(f"Source file does not exist: {input_path}")
    input_format = detect_format(input_path)
    size_before = await file_size(input_path, what="source file")

    progress.update(40, "Loading image...")
    image = await load_image(input_path)

    bounds = options.resize_bounds
    if bounds is not None:
        progress.update(60, "Resizing...")
        max_width, max_height = bounds
        image = await resize_image_async(
            image, max_width, max_height, preserve_aspect=options.preserve_aspect
        )
    else:
        # 只提供其中一個邊界時同樣略過
        progress.update(60, "No resizing needed")

    progress.update(70, "Preparing conversion...")
    output_format = parse_output_format(options.output_format)

    progress.update(90, "Saving...")
    size_after = await save_image(image, output_path, output_format, options.quality)

    progress.update(100, "Finalizing...")
    reduction = size_reduction_percent(size_before, size_after)

    progress.finish_success(
        f"Conversion finished: {format_file_size(size_before)} → "
        f"{format_file_size(size_after)} ({reduction:.1f}% reduction)"
    )

    return ConversionResult(
        success=True,
        input_path=str(input_path),
        output_path=str(output_path),
        input_format=input_format,
        output_format=output_format,
        size_before=size_before,
        size_after=size_after,
        size_reduction_percent=reduction,
        message=(
            f"Conversion succeeded: {input_format} -> {output_format} "
            f"({reduction:.1f}% reduction)"
        ),
    )
