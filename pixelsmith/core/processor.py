"""
批次處理器模組

負責資料夾內圖片的批次轉換/去背，遵循單一職責原則 (SRP)
每張圖片是獨立的作業，失敗互不影響
"""

import asyncio
import logging
from collections import Counter
from collections.abc import Callable
from pathlib import Path

from pixelsmith.data_model import (
    SUPPORTED_EXTENSIONS,
    BatchJob,
    BatchOperation,
    BatchResult,
    ConversionResult,
    ImageFormat,
    is_supported_image,
)
from pixelsmith.errors import PixelsmithError
from pixelsmith.features.background_removal import (
    OUTPUT_FORMAT,
    run_background_removal,
)
from pixelsmith.features.image_conversion import parse_output_format, run_conversion

from .progress import LoggingProgressReporter


logger = logging.getLogger(__name__)

ItemCallback = Callable[..., None]


class BatchProcessor:
    """
    批次處理器

    max_workers=1 時依序處理，>1 時最多同時執行 max_workers 個作業
    """

    def __init__(
        self,
        progress_callback: ItemCallback | None = None,
        max_workers: int = 1,
    ):
        """
        初始化處理器

        Args:
            progress_callback: 每張圖片完成時呼叫
                callback(filename, success=bool, error=str | None)，
                可直接傳入 BatchProgressBar.update
            max_workers: 同時處理數（1=序列處理，>1=並行處理）
        """
        self._progress_callback = progress_callback or self._default_progress
        self._max_workers = max(1, max_workers)

    @staticmethod
    def _default_progress(
        filename: str, *, success: bool, error: str | None = None
    ) -> None:
        """預設進度顯示"""
        if success:
            logger.info("%s ... done", filename)
        else:
            logger.info("%s ... failed (%s)", filename, error)

    def scan_images(self, folder: Path) -> list[Path]:
        """
        掃描資料夾中的圖片檔案

        Args:
            folder: 資料夾路徑

        Returns:
            圖片檔案路徑列表（已排序）
        """
        return [f for f in sorted(folder.iterdir()) if is_supported_image(f)]

    @staticmethod
    def target_format(job: BatchJob) -> ImageFormat:
        """批次作業的輸出格式"""
        if job.operation is BatchOperation.REMOVE_BACKGROUND:
            return OUTPUT_FORMAT
        if job.conversion is None:
            raise ValueError("conversion options are required for convert")
        return parse_output_format(job.conversion.output_format)

    @staticmethod
    def plan_outputs(
        image_files: list[Path], output_folder: Path, fmt: ImageFormat
    ) -> dict[Path, Path]:
        """
        決定每張圖片的輸出路徑

        主檔名相同的輸入（例如 a.png 與 a.jpg）會加上原副檔名（a_png.png、a_jpg.png），
        仍然重複時再加上序號；比對不分大小寫

        Args:
            image_files: 輸入圖片（已排序）
            output_folder: 輸出資料夾
            fmt: 輸出格式

        Returns:
            輸入路徑對應的輸出路徑，彼此不重複
        """
        stems = Counter(p.stem.casefold() for p in image_files)
        used: set[str] = set()
        plan: dict[Path, Path] = {}

        for image_path in image_files:
            stem = image_path.stem
            if stems[stem.casefold()] > 1:
                stem = f"{stem}_{image_path.suffix[1:].lower()}"

            name = f"{stem}{fmt.extension}"
            index = 1
            while name.casefold() in used:
                name = f"{stem}_{index}{fmt.extension}"
                index += 1

            if name != f"{image_path.stem}{fmt.extension}":
                logger.warning("Output name collision: %s -> %s", image_path.name, name)
            used.add(name.casefold())
            plan[image_path] = output_folder / name

        return plan

    async def process_folder(self, job: BatchJob) -> BatchResult:
        """
        處理資料夾中的所有圖片

        Args:
            job: 批次設定

        Returns:
            批次結果

        Raises:
            ValidationError: 轉換的輸出格式不支援（在處理任何檔案前偵測）
        """
        output_folder = job.output_folder
        if output_folder is None:
            raise ValueError("Output folder is not set")

        fmt = self.target_format(job)
        image_files = self.scan_images(job.input_folder)
        total = len(image_files)

        if total == 0:
            return BatchResult(total=0, success=0, failed=0, output_folder=output_folder)

        if self._max_workers > 1 and total > 1:
            logger.info(
                "Parallel processing: %d images with %d workers",
                total,
                self._max_workers,
            )

        semaphore = asyncio.Semaphore(self._max_workers)
        errors: dict[str, str] = {}

        async def _process_one(image_path: Path, output_path: Path) -> bool:
            error: str | None = None
            async with semaphore:
                try:
                    await self._run(job, image_path, output_path)
                except PixelsmithError as exc:
                    error = str(exc)
                    errors[image_path.name] = error
                    logger.warning("Failed to process %s: %s", image_path.name, exc)
            self._progress_callback(
                image_path.name, success=error is None, error=error
            )
            return error is None

        outputs = self.plan_outputs(image_files, output_folder, fmt)
        results = await asyncio.gather(
            *(_process_one(p, outputs[p]) for p in image_files)
        )
        success_count = sum(results)

        return BatchResult(
            total=total,
            success=success_count,
            failed=total - success_count,
            output_folder=output_folder,
            errors=errors,
        )

    async def _run(
        self, job: BatchJob, input_path: Path, output_path: Path
    ) -> ConversionResult:
        progress = LoggingProgressReporter(input_path.name)
        if job.operation is BatchOperation.REMOVE_BACKGROUND:
            if job.background_removal is None:
                raise ValueError(
                    "background_removal options are required for remove-background"
                )
            return await run_background_removal(
                input_path, output_path, job.background_removal, progress
            )
        if job.conversion is None:
            raise ValueError("conversion options are required for convert")
        return await run_conversion(input_path, output_path, job.conversion, progress)


def get_supported_extensions() -> frozenset[str]:
    """取得支援的圖片格式"""
    return SUPPORTED_EXTENSIONS
