"""
公開指令模組

對外提供的圖片操作；每個指令都以 logged_command 包裝，
記錄進入/結果並將內部錯誤收斂為 CommandError
"""

from .base import logged_command
from .images import (
    convert_image,
    get_image_info,
    list_supported_formats,
    remove_background,
)


__all__ = [
    "convert_image",
    "get_image_info",
    "list_supported_formats",
    "logged_command",
    "remove_background",
]
