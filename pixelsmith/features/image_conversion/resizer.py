"""
縮放模組

- 保持比例：縮小至可放入邊界框內，永不放大（thumbnail 語意）
- 精確尺寸：忽略比例，以 Lanczos 濾波縮放到指定大小
"""

import asyncio

from PIL import Image


def resize_image(
    image: Image.Image,
    max_width: int,
    max_height: int,
    *,
    preserve_aspect: bool,
) -> Image.Image:
    """
    縮放圖片

    Args:
        image: 輸入圖片（不會被修改）
        max_width: 最大寬度
        max_height: 最大高度
        preserve_aspect: 是否保持長寬比

    Returns:
        縮放後的新圖片
    """
    if preserve_aspect:
        thumb = image.copy()
        thumb.thumbnail((max_width, max_height), Image.Resampling.LANCZOS)
        return thumb

    return image.resize((max_width, max_height), Image.Resampling.LANCZOS)


async def resize_image_async(
    image: Image.Image,
    max_width: int,
    max_height: int,
    *,
    preserve_aspect: bool,
) -> Image.Image:
    """resize_image 的非同步版本，在 worker thread 中執行"""
    return await asyncio.to_thread(
        resize_image, image, max_width, max_height, preserve_aspect=preserve_aspect
    )
