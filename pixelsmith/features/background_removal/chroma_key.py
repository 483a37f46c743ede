"""
色鍵去背模組

依像素顏色與目標色的 RGB 歐氏距離重新分類透明度：
- 距離 <= T：完全透明
- T < 距離 <= 1.5T：線性過渡帶
- 其餘：不變
"""

import logging
import re

import numpy as np

from pixelsmith.errors import ValidationError


logger = logging.getLogger(__name__)

# 常數定義
HEX_COLOR_LENGTH = 6
TRANSITION_BAND_RATIO = 1.5

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]{6}")

RGB = tuple[int, int, int]


def parse_hex_color(text: str) -> RGB:
    """
    解析 "#RRGGBB" 顏色字串（# 可省略）

    Args:
        text: 顏色字串

    Returns:
        (r, g, b)

    Raises:
        ValidationError: 長度錯誤或包含非十六進位字元
    """
    hex_text = text.lstrip("#")

    if len(hex_text) != HEX_COLOR_LENGTH:
        raise ValidationError("Color must use the #RRGGBB format")

    if not _HEX_DIGITS.fullmatch(hex_text):
        raise ValidationError("Invalid hexadecimal color")

    return (
        int(hex_text[0:2], 16),
        int(hex_text[2:4], 16),
        int(hex_text[4:6], 16),
    )


def color_distance(pixels: np.ndarray, key: RGB) -> np.ndarray:
    """
    計算每個像素與目標色的 RGB 歐氏距離（不含 alpha）

    Args:
        pixels: (H, W, 4) RGBA 緩衝區
        key: 目標色

    Returns:
        (H, W) float64 距離
    """
    diff = pixels[:, :, :3].astype(np.float64) - np.asarray(key, dtype=np.float64)
    return np.sqrt(np.sum(diff * diff, axis=2))


def remove_key_color(pixels: np.ndarray, key: RGB, tolerance: int) -> np.ndarray:
    """
    移除接近目標色的背景

    逐像素獨立運算，回傳新的緩衝區

    Args:
        pixels: (H, W, 4) uint8 RGBA 緩衝區（不會被修改）
        key: 目標色
        tolerance: 容差 T (0-255)；T=0 只移除完全相同的顏色且沒有過渡帶

    Returns:
        處理後的 RGBA 緩衝區
    """
    threshold = float(tolerance)
    distance = color_distance(pixels, key)
    alpha = pixels[:, :, 3].astype(np.float64)
    new_alpha = alpha.copy()

    transparent = distance <= threshold
    new_alpha[transparent] = 0

    # T=0 時 0.5T 為零，過渡帶不存在
    if tolerance > 0:
        band = ~transparent & (distance <= threshold * TRANSITION_BAND_RATIO)
        factor = np.minimum((distance[band] - threshold) / (threshold * 0.5), 1.0)
        new_alpha[band] = np.round(alpha[band] * factor)

    result = pixels.copy()
    result[:, :, 3] = np.clip(new_alpha, 0, 255).astype(np.uint8)

    logger.debug(
        "Key color %s removed: %d transparent pixels",
        key,
        int(np.count_nonzero(transparent)),
    )
    return result
