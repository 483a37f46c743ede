"""
邊緣柔化模組

對半透明像素（0 < alpha < 255）的 alpha 做方形鄰域平均（box filter）
"""

import numpy as np


PIXEL_MAX_VALUE = 255


def _window_bounds(size: int, radius: int) -> tuple[np.ndarray, np.ndarray]:
    """每個座標的鄰域 [start, stop)，裁切到影像範圍內"""
    coords = np.arange(size)
    start = np.clip(coords - radius, 0, size)
    stop = np.clip(coords + radius + 1, 0, size)
    return start, stop


def soften_edges(pixels: np.ndarray, radius: int) -> np.ndarray:
    """
    柔化透明度邊緣

    所有鄰居 alpha 都從柔化前的快照讀取，結果寫入另一個輸出緩衝區，
    因此結果與走訪順序無關。平均值為整數截斷，鄰域為
    [-R, R] x [-R, R] 與影像範圍的交集。

    Args:
        pixels: (H, W, 4) uint8 RGBA 緩衝區（不會被修改）
        radius: 柔化半徑 R；R=0 時不做任何事

    Returns:
        新的 RGBA 緩衝區
    """
    if radius <= 0:
        return pixels.copy()

    snapshot = pixels.copy()
    alpha = snapshot[:, :, 3].astype(np.int64)
    height, width = alpha.shape

    # 積分圖：integral[y, x] = alpha[:y, :x] 的總和
    integral = np.zeros((height + 1, width + 1), dtype=np.int64)
    integral[1:, 1:] = alpha.cumsum(axis=0).cumsum(axis=1)

    y0, y1 = _window_bounds(height, radius)
    x0, x1 = _window_bounds(width, radius)

    totals = (
        integral[y1][:, x1]
        - integral[y0][:, x1]
        - integral[y1][:, x0]
        + integral[y0][:, x0]
    )
    counts = np.outer(y1 - y0, x1 - x0)
    means = totals // counts

    partial = (alpha > 0) & (alpha < PIXEL_MAX_VALUE)

    output = snapshot.copy()
    output[:, :, 3][partial] = means[partial].astype(np.uint8)
    return output
