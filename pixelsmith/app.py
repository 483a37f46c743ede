"""
應用程式服務層

協調互動介面、公開指令與批次處理器
"""

import asyncio
import logging
from typing import TypeVar

from pixelsmith.commands import (
    convert_image,
    get_image_info,
    list_supported_formats,
    remove_background,
)
from pixelsmith.core.processor import BatchProcessor
from pixelsmith.core.progress import BatchProgressBar, RichProgressReporter
from pixelsmith.data_model import BatchJob, BatchOperation, BatchResult
from pixelsmith.errors import CommandError, ValidationError
from pixelsmith.settings import AppSettings, settings
from pixelsmith.ui import ModernUI, Operation, OperationRequest


logger = logging.getLogger(__name__)

T = TypeVar("T")


def _required(value: T | None, name: str) -> T:
    """取出操作必填的欄位"""
    if value is None:
        raise ValueError(f"{name} is required for this operation")
    return value


class ApplicationService:
    """
    應用程式服務

    每次操作建立自己的進度回報，操作之間不共享狀態
    """

    def __init__(
        self,
        ui: ModernUI | None = None,
        app_settings: AppSettings | None = None,
    ):
        """
        初始化應用程式服務

        Args:
            ui: 使用者介面 (可注入，預設為 ModernUI)
            app_settings: 設定 (可注入以供測試)
        """
        self.settings = app_settings or settings
        self.ui = ui or ModernUI(app_settings=self.settings)

    def run(self) -> int:
        """
        執行應用程式主循環

        Returns:
            退出碼 (0: 成功, 1: 失敗, 130: 中斷)
        """
        try:
            while True:
                request = self.ui.run()
                if request is None:
                    print("\n👋 再見！")
                    return 0

                self.ui.show_summary(request)

                try:
                    asyncio.run(self.execute(request))
                except CommandError as exc:
                    print(f"\n❌ {exc.message}\n")

                print("🔄 返回主選單...\n")

        except KeyboardInterrupt:
            print("\n\n👋 已中斷操作，再見！")
            return 130

        except Exception:
            logger.exception("Application error")
            print("\n❌ 應用程式發生錯誤，請查看日誌\n")
            return 1

    async def execute(self, request: OperationRequest) -> None:
        """
        執行一個操作

        Args:
            request: 操作設定

        Raises:
            CommandError: 單一檔案操作失敗
        """
        operation = request.operation

        if operation is Operation.LIST_FORMATS:
            formats = await list_supported_formats()
            print("  " + ", ".join(formats))
            return

        input_path = _required(request.input_path, "input_path")

        if operation is Operation.ANALYZE:
            info = await get_image_info(input_path)
            print(
                f"  {info.name}: {info.format} {info.width}x{info.height}, "
                f"{info.size_bytes} bytes"
            )
            return

        output_path = _required(request.output_path, "output_path")

        if operation is Operation.CONVERT:
            result = await convert_image(
                input_path,
                output_path,
                _required(request.conversion, "conversion"),
                progress=RichProgressReporter("Image conversion"),
            )
            print(f"  {result.message}")
            return

        if operation is Operation.REMOVE_BACKGROUND:
            result = await remove_background(
                input_path,
                output_path,
                _required(request.background_removal, "background_removal"),
                progress=RichProgressReporter("Background removal"),
            )
            print(f"  {result.message}")
            return

        batch_operation = (
            BatchOperation.CONVERT
            if operation is Operation.BATCH_CONVERT
            else BatchOperation.REMOVE_BACKGROUND
        )
        job = BatchJob(
            input_folder=input_path,
            operation=batch_operation,
            conversion=request.conversion,
            background_removal=request.background_removal,
            output_folder=output_path,
        )
        self._display_result(await self.process_batch(job))

    async def process_batch(self, job: BatchJob) -> BatchResult:
        """
        處理整個資料夾

        Args:
            job: 批次設定

        Returns:
            批次結果

        Raises:
            CommandError: 批次設定無效
        """
        total = len(BatchProcessor().scan_images(job.input_folder))

        with BatchProgressBar(total=total) as bar:
            processor = BatchProcessor(
                progress_callback=bar.update, max_workers=self.settings.max_workers
            )
            try:
                return await processor.process_folder(job)
            except ValidationError as exc:
                raise CommandError(f"Batch processing failed: {exc}") from exc

    def _display_result(self, result: BatchResult) -> None:
        """
        顯示處理結果

        Args:
            result: 批次結果
        """
        print("\n" + "=" * 60)
        print("✅ 處理完成！".center(60))
        print("=" * 60)
        print(f"\n  📊 總計: {result.total} 張圖片")
        print(f"  ✅ 成功: {result.success} 張")
        if result.failed > 0:
            print(f"  ❌ 失敗: {result.failed} 張")
            for name, message in result.errors.items():
                print(f"     - {name}: {message}")
        print(f"  📂 輸出: {result.output_folder}")
        print("\n" + "=" * 60 + "\n")
