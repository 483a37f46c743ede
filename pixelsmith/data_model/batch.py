"""
批次處理資料模型
"""

from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .core import BackgroundRemovalOptions, ConversionOptions


class BatchOperation(StrEnum):
    """批次操作類型"""

    CONVERT = "convert"
    REMOVE_BACKGROUND = "remove-background"


class BatchJob(BaseModel):
    """
    批次處理設定

    Attributes:
        input_folder: 輸入資料夾路徑
        operation: 操作類型
        conversion: 轉換設定（operation 為 convert 時必填）
        background_removal: 背景移除設定（operation 為 remove-background 時必填）
        output_folder: 輸出資料夾路徑，預設為 input_folder / "output"
    """

    model_config = ConfigDict(frozen=True)

    input_folder: Path
    operation: BatchOperation
    conversion: ConversionOptions | None = None
    background_removal: BackgroundRemovalOptions | None = None
    output_folder: Path | None = None

    @model_validator(mode="after")
    def _check_options(self) -> "BatchJob":
        if self.operation is BatchOperation.CONVERT and self.conversion is None:
            raise ValueError("conversion options are required for convert")
        if (
            self.operation is BatchOperation.REMOVE_BACKGROUND
            and self.background_removal is None
        ):
            raise ValueError(
                "background_removal options are required for remove-background"
            )
        return self

    def model_post_init(self, __context: object) -> None:
        """Set default output folder after initialization."""
        if self.output_folder is None:
            # Use object.__setattr__ since model is frozen
            object.__setattr__(self, "output_folder", self.input_folder / "output")


class BatchResult(BaseModel):
    """
    批次處理結果

    Attributes:
        total: 總圖片數
        success: 成功數
        failed: 失敗數
        output_folder: 輸出資料夾路徑
        errors: 失敗檔案名稱對應的錯誤訊息
    """

    model_config = ConfigDict(frozen=True)

    total: int = Field(ge=0)
    success: int = Field(ge=0)
    failed: int = Field(ge=0)
    output_folder: Path
    errors: dict[str, str] = Field(default_factory=dict)

    @property
    def success_rate(self) -> float:
        """成功率"""
        return self.success / self.total if self.total > 0 else 0.0

    @property
    def is_complete_success(self) -> bool:
        """是否全部成功"""
        return self.failed == 0
