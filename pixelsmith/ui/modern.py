"""
現代化互動式使用者介面

使用 InquirerPy 提供美觀的 CLI 互動體驗
- 方向鍵選擇選項
- 記住最近使用的路徑
"""

from enum import StrEnum
from pathlib import Path

from InquirerPy import inquirer
from InquirerPy.base.control import Choice
from InquirerPy.separator import Separator
from pydantic import BaseModel, ConfigDict, model_validator

from pixelsmith.data_model import (
    BackgroundRemovalOptions,
    ConversionOptions,
    ImageFormat,
)
from pixelsmith.settings import AppSettings, settings
from pixelsmith.ui.history import PathHistory, PathKind


class Operation(StrEnum):
    """互動介面可執行的操作"""

    ANALYZE = "analyze"
    CONVERT = "convert"
    REMOVE_BACKGROUND = "remove-background"
    BATCH_CONVERT = "batch-convert"
    BATCH_REMOVE_BACKGROUND = "batch-remove-background"
    LIST_FORMATS = "list-formats"


CONVERT_OPERATIONS = frozenset({Operation.CONVERT, Operation.BATCH_CONVERT})
REMOVAL_OPERATIONS = frozenset(
    {Operation.REMOVE_BACKGROUND, Operation.BATCH_REMOVE_BACKGROUND}
)
BATCH_OPERATIONS = frozenset(
    {Operation.BATCH_CONVERT, Operation.BATCH_REMOVE_BACKGROUND}
)


class OperationRequest(BaseModel):
    """
    使用者在介面中完成的操作設定

    Attributes:
        operation: 操作類型
        input_path: 輸入檔案或資料夾
        output_path: 輸出檔案或資料夾
        conversion: 轉換設定
        background_removal: 背景移除設定
    """

    model_config = ConfigDict(frozen=True)

    operation: Operation
    input_path: Path | None = None
    output_path: Path | None = None
    conversion: ConversionOptions | None = None
    background_removal: BackgroundRemovalOptions | None = None

    @model_validator(mode="after")
    def _check_fields(self) -> "OperationRequest":
        operation = self.operation
        if operation is Operation.LIST_FORMATS:
            return self
        if self.input_path is None:
            raise ValueError(f"input_path is required for {operation}")
        if operation is Operation.ANALYZE:
            return self
        if self.output_path is None:
            raise ValueError(f"output_path is required for {operation}")
        if operation in CONVERT_OPERATIONS and self.conversion is None:
            raise ValueError(f"conversion options are required for {operation}")
        if operation in REMOVAL_OPERATIONS and self.background_removal is None:
            raise ValueError(
                f"background_removal options are required for {operation}"
            )
        return self


class ModernUI:
    """
    現代化使用者介面

    操作流程：
    1. 選擇操作類型
    2. 選擇輸入檔案/資料夾
    3. 設定參數
    4. 直接執行（無確認提示）
    """

    def __init__(
        self,
        history: PathHistory | None = None,
        app_settings: AppSettings | None = None,
    ) -> None:
        """初始化 UI"""
        self._settings = app_settings or settings
        self._history = history or PathHistory(self._settings.history_dir)

    def run(self) -> OperationRequest | None:
        """
        執行互動式設定流程

        Returns:
            操作設定，若使用者取消則返回 None
        """
        self._show_welcome()

        operation = self._select_operation()
        if operation is None:
            return None

        if operation is Operation.LIST_FORMATS:
            return OperationRequest(operation=operation)

        batch = operation in BATCH_OPERATIONS
        input_path = self._select_input(folder=batch)
        if input_path is None:
            return self.run()

        if operation is Operation.ANALYZE:
            return OperationRequest(operation=operation, input_path=input_path)

        if operation in CONVERT_OPERATIONS:
            conversion = self._configure_conversion()
            if conversion is None:
                return self.run()
            output_path = self._select_output(
                input_path, ImageFormat(conversion.output_format), folder=batch
            )
            return OperationRequest(
                operation=operation,
                input_path=input_path,
                output_path=output_path,
                conversion=conversion,
            )

        removal = self._configure_background_removal()
        if removal is None:
            return self.run()
        output_path = self._select_output(input_path, ImageFormat.PNG, folder=batch)
        return OperationRequest(
            operation=operation,
            input_path=input_path,
            output_path=output_path,
            background_removal=removal,
        )

    def _show_welcome(self) -> None:
        """顯示歡迎訊息"""
        print("\n" + "=" * 60)
        print("🎨  圖片轉換與去背工具  🎨".center(60))
        print("=" * 60)
        print("\n💡 提示：使用 ↑↓ 方向鍵選擇，Enter 確認，Ctrl+C 離開\n")

    def _select_operation(self) -> Operation | None:
        """
        選擇操作類型

        Returns:
            操作類型，若取消則返回 None
        """
        choices = [
            Separator("🎯 選擇操作類型"),
            Choice(value=Operation.CONVERT, name="🔄 格式轉換 - 轉換格式並可縮放"),
            Choice(
                value=Operation.REMOVE_BACKGROUND,
                name="🎨 背景移除 - 移除指定顏色並輸出透明 PNG",
            ),
            Choice(value=Operation.ANALYZE, name="📷 圖片資訊 - 尺寸、格式與大小"),
            Choice(value=Operation.BATCH_CONVERT, name="📁 批次轉換 - 整個資料夾"),
            Choice(
                value=Operation.BATCH_REMOVE_BACKGROUND,
                name="📁 批次去背 - 整個資料夾",
            ),
            Choice(value=Operation.LIST_FORMATS, name="📋 支援的格式"),
            Choice(value=None, name="👋 離開"),
        ]

        return inquirer.select(
            message="選擇要執行的操作:",
            choices=choices,
            default=Operation.CONVERT,
            vi_mode=True,
        ).execute()

    def _select_input(self, *, folder: bool) -> Path | None:
        """
        選擇輸入檔案或資料夾

        Args:
            folder: 是否選擇資料夾

        Returns:
            路徑，若取消則返回 None
        """
        kind = PathKind.FOLDER if folder else PathKind.FILE
        recent = self._history.recent(kind, limit=5)
        choices: list[Choice | Separator] = []

        if recent:
            choices.append(Separator("📁 最近使用"))
            for path in recent:
                choices.append(Choice(value=path, name=f"  {path.name} ({path.parent})"))
            choices.append(Separator())

        choices.append(Choice(value="__custom__", name="📝 輸入新路徑..."))
        choices.append(Choice(value=None, name="↩️  返回"))

        selected = inquirer.select(
            message="選擇輸入資料夾:" if folder else "選擇輸入圖片:",
            choices=choices,
            vi_mode=True,
        ).execute()

        if selected is None:
            return None

        if selected == "__custom__":
            path_str = inquirer.filepath(
                message="輸入路徑:",
                default=str(Path.cwd()),
                validate=lambda p: Path(p).is_dir() if folder else Path(p).is_file(),
                invalid_message="路徑不存在或類型不符",
                only_directories=folder,
            ).execute()

            if path_str is None:
                return self._select_input(folder=folder)

            selected = Path(path_str)

        self._history.remember(selected)
        return selected

    def _select_output(self, input_path: Path, fmt: ImageFormat, *, folder: bool) -> Path:
        """
        選擇輸出路徑

        Args:
            input_path: 輸入路徑
            fmt: 輸出格式（決定預設副檔名）
            folder: 是否為資料夾

        Returns:
            輸出路徑
        """
        if folder:
            default = input_path / "output"
        else:
            default = input_path.parent / "output" / f"{input_path.stem}{fmt.extension}"

        path_str = inquirer.filepath(
            message="輸出路徑:",
            default=str(default),
        ).execute()
        return Path(path_str) if path_str else default

    def _configure_conversion(self) -> ConversionOptions | None:
        """
        設定轉換參數

        Returns:
            轉換設定，若取消則返回 None
        """
        output_format = inquirer.select(
            message="輸出格式:",
            choices=[Choice(value=fmt.value, name=f"  {fmt.value}") for fmt in ImageFormat],
            vi_mode=True,
        ).execute()
        if output_format is None:
            return None

        quality = None
        if output_format == ImageFormat.JPEG:
            quality = int(
                inquirer.number(
                    message="JPEG 品質 (1-100):",
                    min_allowed=1,
                    max_allowed=100,
                    default=self._settings.default_quality,
                ).execute()
            )

        max_width = max_height = None
        preserve_aspect = True
        if inquirer.confirm(message="是否縮放?", default=False).execute():
            max_width = int(
                inquirer.number(message="最大寬度:", min_allowed=1, default=1920).execute()
            )
            max_height = int(
                inquirer.number(message="最大高度:", min_allowed=1, default=1080).execute()
            )
            preserve_aspect = inquirer.confirm(
                message="保持長寬比?", default=True
            ).execute()

        return ConversionOptions(
            output_format=output_format,
            quality=quality,
            max_width=max_width,
            max_height=max_height,
            preserve_aspect=preserve_aspect,
        )

    def _configure_background_removal(self) -> BackgroundRemovalOptions | None:
        """
        設定背景移除參數

        Returns:
            背景移除設定，若取消則返回 None
        """
        key_color = inquirer.text(
            message="背景顏色 (#RRGGBB):",
            default="#FFFFFF",
        ).execute()
        if not key_color:
            return None

        tolerance = int(
            inquirer.number(
                message="容差 (0-255):",
                min_allowed=0,
                max_allowed=255,
                default=self._settings.default_tolerance,
            ).execute()
        )

        soften_edges = inquirer.confirm(message="柔化邊緣?", default=False).execute()
        soften_radius = self._settings.default_soften_radius
        if soften_edges:
            soften_radius = int(
                inquirer.number(
                    message="柔化半徑 (0-255):",
                    min_allowed=0,
                    max_allowed=255,
                    default=soften_radius,
                ).execute()
            )

        return BackgroundRemovalOptions(
            key_color=key_color,
            tolerance=tolerance,
            soften_edges=soften_edges,
            soften_radius=soften_radius,
        )

    def show_summary(self, request: OperationRequest) -> None:
        """
        顯示處理摘要

        Args:
            request: 操作設定
        """
        print("\n" + "=" * 60)
        print("📋 處理設定摘要".center(60))
        print("=" * 60)
        print(f"\n  🎯 操作: {request.operation.value}")
        print(f"  📁 輸入: {request.input_path}")
        print(f"  📂 輸出: {request.output_path}")
        if request.conversion is not None:
            print(f"  🖼️  格式: {request.conversion.output_format}")
            if request.conversion.quality is not None:
                print(f"  💪 品質: {request.conversion.quality}")
        if request.background_removal is not None:
            print(f"  🎨 背景色: {request.background_removal.key_color}")
            print(f"  📏 容差: {request.background_removal.tolerance}")
        print("\n" + "=" * 60)
        print("\n⏳ 開始處理...\n")
