"""
縮放測試
"""

import pytest
from PIL import Image

from pixelsmith.features.image_conversion.resizer import resize_image


class TestPreserveAspect:
    """保持比例（thumbnail 語意）"""

    @pytest.mark.unit
    def test_never_upscales(self) -> None:
        img = Image.new("RGB", (100, 50))
        resized = resize_image(img, 400, 400, preserve_aspect=True)
        assert resized.size[0] <= 100
        assert resized.size[1] <= 50

    @pytest.mark.unit
    def test_fits_within_bounds(self) -> None:
        img = Image.new("RGB", (100, 50))
        resized = resize_image(img, 50, 50, preserve_aspect=True)
        assert resized.size == (50, 25)

    @pytest.mark.unit
    def test_does_not_modify_input(self) -> None:
        img = Image.new("RGB", (100, 50))
        resize_image(img, 10, 10, preserve_aspect=True)
        assert img.size == (100, 50)


class TestExactResize:
    """精確尺寸"""

    @pytest.mark.unit
    def test_ignores_aspect_ratio(self) -> None:
        img = Image.new("RGB", (100, 50))
        assert resize_image(img, 30, 40, preserve_aspect=False).size == (30, 40)

    @pytest.mark.unit
    def test_can_upscale(self) -> None:
        img = Image.new("RGBA", (10, 10))
        assert resize_image(img, 25, 15, preserve_aspect=False).size == (25, 15)
