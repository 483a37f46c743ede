"""
檔案工具模組

提供管線使用的檔案系統原語；阻塞的 I/O 一律交給 worker thread，
呼叫端以 await 取得結果
"""

import asyncio
import logging
from pathlib import Path

from pixelsmith.errors import SystemFailureError


logger = logging.getLogger(__name__)

_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


async def file_exists(path: Path) -> bool:
    """
    檢查檔案是否存在

    Args:
        path: 檔案路徑

    Returns:
        存在時回傳 True
    """
    logger.debug("🔍 Checking file: %s", path)
    exists = await asyncio.to_thread(path.exists)
    if exists:
        logger.debug("✅ File found: %s", path)
    else:
        logger.debug("❌ File not found: %s", path)
    return exists


async def create_directory(path: Path) -> None:
    """
    遞迴建立資料夾

    Args:
        path: 資料夾路徑

    Raises:
        SystemFailureError: 無法建立資料夾
    """
    logger.debug("📁 Creating directory: %s", path)
    try:
        await asyncio.to_thread(path.mkdir, parents=True, exist_ok=True)
    except OSError as exc:
        logger.warning("❌ Failed to create directory %s: %s", path, exc)
        raise SystemFailureError(f"Unable to create directory {path}: {exc}") from exc


async def file_size(path: Path, *, what: str = "file") -> int:
    """
    讀取檔案大小

    Args:
        path: 檔案路徑
        what: 錯誤訊息中描述此檔案的用語

    Returns:
        檔案大小（位元組）

    Raises:
        SystemFailureError: 無法讀取中繼資料
    """
    try:
        stat = await asyncio.to_thread(path.stat)
    except OSError as exc:
        raise SystemFailureError(f"Unable to read the {what}: {exc}") from exc
    return stat.st_size


def format_file_size(size_bytes: int) -> str:
    """
    將位元組數格式化為易讀字串

    Args:
        size_bytes: 位元組數

    Returns:
        例如 "512 B"、"1.5 MB"
    """
    if size_bytes == 0:
        return "0 B"

    size = float(size_bytes)
    unit_index = 0
    while size >= 1024.0 and unit_index < len(_SIZE_UNITS) - 1:
        size /= 1024.0
        unit_index += 1

    if unit_index == 0:
        return f"{size_bytes} {_SIZE_UNITS[0]}"
    return f"{size:.1f} {_SIZE_UNITS[unit_index]}"
