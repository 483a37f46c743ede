"""
Pytest 配置和共用 fixtures
"""

from collections.abc import Callable
from pathlib import Path

import numpy as np
import pytest
from PIL import Image, ImageDraw


class RecordingProgress:
    """記錄所有進度事件的 ProgressReporter"""

    def __init__(self) -> None:
        self.updates: list[tuple[int, str | None]] = []
        self.successes: list[str] = []
        self.errors: list[str] = []

    def update(self, percent: int, label: str | None = None) -> None:
        self.updates.append((percent, label))

    def finish_success(self, message: str) -> None:
        self.successes.append(message)

    def finish_error(self, message: str) -> None:
        self.errors.append(message)

    @property
    def percents(self) -> list[int]:
        return [percent for percent, _ in self.updates]


@pytest.fixture
def progress() -> RecordingProgress:
    """每個測試一個新的進度記錄器"""
    return RecordingProgress()


@pytest.fixture
def make_image(tmp_path: Path) -> Callable[..., Path]:
    """
    建立測試圖片的工廠

    用法::

        path = make_image("a.png", size=(8, 8), color=(255, 0, 0))
    """

    def _make(
        name: str,
        size: tuple[int, int] = (16, 16),
        color: tuple[int, ...] = (128, 128, 128),
        mode: str = "RGB",
        image_format: str | None = None,
    ) -> Path:
        path = tmp_path / name
        Image.new(mode, size, color=color).save(path, format=image_format)
        return path

    return _make


@pytest.fixture
def key_colored_image(tmp_path: Path) -> Path:
    """100x100 純綠（色鍵色）RGBA 圖片"""
    path = tmp_path / "green.png"
    Image.new("RGBA", (100, 100), color=(0, 255, 0, 255)).save(path)
    return path


@pytest.fixture
def noise_png(tmp_path: Path) -> Path:
    """高熵雜訊 PNG（PNG 幾乎無法壓縮）"""
    path = tmp_path / "noise.png"
    rng = np.random.default_rng(42)
    pixels = rng.integers(0, 256, size=(64, 64, 3), dtype=np.uint8)
    Image.fromarray(pixels).save(path)
    return path


@pytest.fixture
def greenscreen_image(tmp_path: Path) -> Path:
    """
    生成綠幕測試圖片

    模擬：綠色背景上的紅色方塊
    """
    path = tmp_path / "greenscreen.png"
    img = Image.new("RGB", (64, 64), color=(0, 177, 64))
    draw = ImageDraw.Draw(img)
    draw.rectangle([(16, 16), (47, 47)], fill=(255, 100, 100))
    img.save(path)
    return path


@pytest.fixture
def images_folder(tmp_path: Path) -> Path:
    """含三張圖片與一個非圖片檔案的資料夾"""
    folder = tmp_path / "images"
    folder.mkdir()
    for name, color in (
        ("a.png", (255, 255, 255)),
        ("b.jpg", (10, 20, 30)),
        ("c.bmp", (200, 0, 0)),
    ):
        Image.new("RGB", (20, 10), color=color).save(folder / name)
    (folder / "readme.txt").write_text("not an image", encoding="utf-8")
    return folder
