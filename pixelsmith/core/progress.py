"""
進度回報模組

- ProgressReporter: 管線各階段使用的進度介面（每次呼叫建立一個）
- LoggingProgressReporter: 以 logging 輸出的預設實作
- RichProgressReporter: 基於 rich 的單一作業進度條
- BatchProgressBar: 基於 rich 的批次處理進度條（含失敗原因）
"""

import logging
from typing import Protocol, runtime_checkable

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)


logger = logging.getLogger(__name__)


@runtime_checkable
class ProgressReporter(Protocol):
    """
    進度回報介面

    百分比為固定檢查點（0-100），不阻塞管線；
    finish_success / finish_error 各作業只會呼叫其中一個，且只呼叫一次
    """

    def update(self, percent: int, label: str | None = None) -> None:
        """更新進度"""
        ...

    def finish_success(self, message: str) -> None:
        """以成功結束"""
        ...

    def finish_error(self, message: str) -> None:
        """以錯誤結束"""
        ...


class LoggingProgressReporter:
    """以 logging 輸出的進度回報"""

    def __init__(self, title: str) -> None:
        self.title = title
        logger.debug("📊 Progress created: %s", title)

    def update(self, percent: int, label: str | None = None) -> None:
        text = label or self.title
        logger.debug("📈 %s: %d%% - %s", self.title, percent, text)
        if percent >= 100:
            logger.info("✅ %s reached 100%%: %s", self.title, text)

    def finish_success(self, message: str) -> None:
        logger.info("🎉 %s finished: %s", self.title, message)

    def finish_error(self, message: str) -> None:
        logger.info("❌ %s failed: %s", self.title, message)


class RichProgressReporter:
    """
    基於 rich 的單一作業進度條

    第一次 update 時才開始顯示，結束時停止並印出結果行

    用法::

        progress = RichProgressReporter("Image conversion")
        await convert_image(src, dst, options, progress=progress)
    """

    def __init__(self, title: str, console: Console | None = None) -> None:
        self.title = title
        self._console = console or Console()
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(bar_width=30),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            console=self._console,
        )
        self._task_id = self._progress.add_task(title, total=100)
        self._started = False

    def _stop(self) -> None:
        if self._started:
            self._progress.stop()
            self._started = False

    def update(self, percent: int, label: str | None = None) -> None:
        if not self._started:
            self._progress.start()
            self._started = True
        description = f"{self.title}: {label}" if label else self.title
        self._progress.update(
            self._task_id, completed=min(max(percent, 0), 100), description=description
        )

    def finish_success(self, message: str) -> None:
        self._stop()
        self._console.print(f"[green]OK[/green] {message}")

    def finish_error(self, message: str) -> None:
        self._stop()
        self._console.print(f"[red]FAIL[/red] {message}")


def create_image_progress(title: str) -> ProgressReporter:
    """建立圖片處理用的預設進度回報"""
    return LoggingProgressReporter(title)


class BatchProgressBar:
    """
    批次處理進度條

    即時顯示成功/失敗數，失敗的檔案連同錯誤訊息一併記錄，
    可直接作為 BatchProcessor 的 progress_callback

    用法::

        with BatchProgressBar(total=len(images)) as bar:
            processor = BatchProcessor(progress_callback=bar.update)
            result = await processor.process_folder(job)
        bar.failures  # {"broken.png": "Data error: ..."}
    """

    def __init__(self, total: int, console: Console | None = None) -> None:
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(bar_width=30),
            MofNCompleteColumn(),
            TextColumn(
                "[green]{task.fields[ok]} OK[/green] "
                "[red]{task.fields[failed]} FAIL[/red]"
            ),
            TimeElapsedColumn(),
            TimeRemainingColumn(),
            console=console,
        )
        self._task_id = self._progress.add_task(
            "Processing", total=total, ok=0, failed=0
        )
        self._success = 0
        self._failures: dict[str, str] = {}

    def __enter__(self) -> "BatchProgressBar":
        self._progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self._progress.stop()

    def update(self, filename: str, *, success: bool, error: str | None = None) -> None:
        """
        記錄一張圖片的結果

        Args:
            filename: 檔案名稱
            success: 處理是否成功
            error: 失敗時的錯誤訊息
        """
        if success:
            self._success += 1
            description = escape(filename)
        else:
            message = error or "unknown error"
            self._failures[filename] = message
            description = f"{escape(filename)} [red]FAIL[/red] {escape(message)}"

        self._progress.update(
            self._task_id,
            advance=1,
            description=description,
            ok=self._success,
            failed=len(self._failures),
        )

    @property
    def success_count(self) -> int:
        """成功數量"""
        return self._success

    @property
    def failed_count(self) -> int:
        """失敗數量"""
        return len(self._failures)

    @property
    def failures(self) -> dict[str, str]:
        """失敗檔案名稱對應的錯誤訊息"""
        return dict(self._failures)
