"""
核心資料模型

使用 Pydantic 進行資料驗證和序列化，確保資料完整性
"""

from enum import StrEnum
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


# 8 位元無號整數（0-255），超出範圍由型別本身拒絕
UInt8 = Annotated[int, Field(ge=0, le=255)]

DEFAULT_JPEG_QUALITY = 85


class ImageFormat(StrEnum):
    """支援的圖片格式（宣告順序即為對外列出的順序）"""

    JPEG = "JPEG"
    PNG = "PNG"
    WEBP = "WebP"
    BMP = "BMP"
    TIFF = "TIFF"
    GIF = "GIF"

    @property
    def pillow_name(self) -> str:
        """Pillow 使用的格式名稱"""
        return self.value.upper()

    @property
    def extension(self) -> str:
        """輸出檔案的標準副檔名"""
        return _FORMAT_EXTENSIONS[self]

    @property
    def supports_alpha(self) -> bool:
        """此管線中唯一保留透明度的格式為 PNG"""
        return self is ImageFormat.PNG


_FORMAT_EXTENSIONS: dict[ImageFormat, str] = {
    ImageFormat.JPEG: ".jpg",
    ImageFormat.PNG: ".png",
    ImageFormat.WEBP: ".webp",
    ImageFormat.BMP: ".bmp",
    ImageFormat.TIFF: ".tiff",
    ImageFormat.GIF: ".gif",
}

# 副檔名（不含點、小寫）對應的格式
EXTENSION_FORMATS: dict[str, ImageFormat] = {
    "jpg": ImageFormat.JPEG,
    "jpeg": ImageFormat.JPEG,
    "png": ImageFormat.PNG,
    "webp": ImageFormat.WEBP,
    "bmp": ImageFormat.BMP,
    "tiff": ImageFormat.TIFF,
    "tif": ImageFormat.TIFF,
    "gif": ImageFormat.GIF,
}

# 支援的圖片格式
SUPPORTED_EXTENSIONS: frozenset[str] = frozenset(
    f".{ext}" for ext in EXTENSION_FORMATS
)


class ImageInfo(BaseModel):
    """
    圖片資訊

    由解碼後的圖片唯讀推導，不會被保存

    Attributes:
        name: 檔案名稱
        path: 檔案路徑
        format: 由副檔名決定的格式標籤
        width: 寬度（像素）
        height: 高度（像素）
        size_bytes: 檔案大小（位元組）
    """

    model_config = ConfigDict(frozen=True)

    name: str
    path: str
    format: ImageFormat
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    size_bytes: int = Field(ge=0)


class ConversionOptions(BaseModel):
    """
    轉換設定

    max_width 與 max_height 必須同時提供才會縮放，只提供其一則略過縮放

    Attributes:
        output_format: 輸出格式名稱（不分大小寫）
        quality: 有損編碼品質 (0-100)，省略時為 85
        max_width: 最大寬度
        max_height: 最大高度
        preserve_aspect: 是否保持長寬比
    """

    model_config = ConfigDict(frozen=True)

    output_format: str
    quality: int | None = Field(default=None, ge=0, le=100)
    max_width: int | None = Field(default=None, gt=0)
    max_height: int | None = Field(default=None, gt=0)
    preserve_aspect: bool = True

    @property
    def resize_bounds(self) -> tuple[int, int] | None:
        """兩個邊界都存在時回傳 (寬, 高)，否則 None"""
        if self.max_width is None or self.max_height is None:
            return None
        return self.max_width, self.max_height


class BackgroundRemovalOptions(BaseModel):
    """
    背景移除設定

    Attributes:
        key_color: 要移除的背景顏色（"#RRGGBB"）
        tolerance: 容差 (0-255)
        soften_edges: 是否柔化邊緣
        soften_radius: 柔化半徑 (0-255)
    """

    model_config = ConfigDict(frozen=True)

    key_color: str = "#FFFFFF"
    tolerance: UInt8 = 30
    soften_edges: bool = False
    soften_radius: UInt8 = 2


class ConversionResult(BaseModel):
    """
    轉換結果

    Attributes:
        success: 是否成功
        input_path: 輸入檔案路徑
        output_path: 輸出檔案路徑
        input_format: 輸入格式標籤
        output_format: 輸出格式標籤
        size_before: 轉換前大小（位元組）
        size_after: 轉換後大小（位元組）
        size_reduction_percent: 大小縮減百分比
        message: 給使用者的訊息
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    input_path: str
    output_path: str
    input_format: ImageFormat
    output_format: ImageFormat
    size_before: int = Field(ge=0)
    size_after: int = Field(ge=0)
    size_reduction_percent: float
    message: str


def size_reduction_percent(size_before: int, size_after: int) -> float:
    """
    計算大小縮減百分比

    Args:
        size_before: 原始大小
        size_after: 輸出大小

    Returns:
        (before - after) / before * 100，before 為 0 時回傳 0.0
    """
    if size_before <= 0:
        return 0.0
    return (size_before - size_after) * 100 / size_before


def is_supported_image(path: Path) -> bool:
    """
    檢查檔案是否為支援的圖片格式

    Args:
        path: 檔案路徑

    Returns:
        是否為支援的圖片格式
    """
    return path.is_file() and path.suffix.lower() in SUPPORTED_EXTENSIONS
