"""
圖片格式轉換功能

來源解碼、縮放、格式編碼與完整轉換管線
"""

from .encoder import (
    encode_image,
    list_formats,
    normalize_mode,
    parse_output_format,
    resolve_quality,
    save_image,
)
from .pipeline import run_conversion
from .resizer import resize_image
from .source import (
    analyze_image,
    detect_format,
    from_pixel_buffer,
    load_image,
    to_pixel_buffer,
)


__all__ = [
    "analyze_image",
    "detect_format",
    "encode_image",
    "from_pixel_buffer",
    "list_formats",
    "load_image",
    "normalize_mode",
    "parse_output_format",
    "resize_image",
    "resolve_quality",
    "run_conversion",
    "save_image",
    "to_pixel_buffer",
]
