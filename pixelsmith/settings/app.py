"""
應用程式設定

使用 Pydantic BaseSettings 管理環境變數和配置
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    應用程式設定

    從環境變數和 .env 文件讀取設定

    Attributes:
        log_level: 日誌級別 (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        default_quality: 互動介面預設的 JPEG 品質
        default_tolerance: 互動介面預設的背景容差
        default_soften_radius: 互動介面預設的柔化半徑
        max_workers: 批次處理的最大同時處理數
        history_dir: 路徑歷史檔案所在目錄
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PIXELSMITH_",
        case_sensitive=False,
    )

    # 日誌設定
    log_level: str = "INFO"

    # 圖片處理設定
    default_quality: int = Field(default=85, ge=1, le=100)
    default_tolerance: int = Field(default=30, ge=0, le=255)
    default_soften_radius: int = Field(default=2, ge=0, le=255)

    # 批次設定
    max_workers: int = Field(default=4, ge=1)

    # 歷史記錄
    history_dir: Path = Path.home() / ".cache" / "pixelsmith"


# 創建全局設定實例
settings = AppSettings()
