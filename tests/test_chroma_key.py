"""
色鍵去背演算法測試
"""

import numpy as np
import pytest

from pixelsmith.errors import ValidationError
from pixelsmith.features.background_removal.chroma_key import (
    color_distance,
    parse_hex_color,
    remove_key_color,
)


BLACK = (0, 0, 0)


def _pixels(*rgba: tuple[int, int, int, int]) -> np.ndarray:
    """一列像素"""
    return np.array([list(rgba)], dtype=np.uint8)


class TestParseHexColor:
    """顏色字串解析"""

    @pytest.mark.unit
    def test_with_hash(self) -> None:
        assert parse_hex_color("#FF8000") == (255, 128, 0)

    @pytest.mark.unit
    def test_without_hash_lowercase(self) -> None:
        assert parse_hex_color("00ff0a") == (0, 255, 10)

    @pytest.mark.unit
    @pytest.mark.parametrize("text", ["#FFF", "", "#1234567", "12345"])
    def test_wrong_length(self, text: str) -> None:
        with pytest.raises(ValidationError, match="#RRGGBB"):
            parse_hex_color(text)

    @pytest.mark.unit
    @pytest.mark.parametrize("text", ["#GGGGGG", "12 456", "+12345"])
    def test_non_hex_digits(self, text: str) -> None:
        with pytest.raises(ValidationError, match="Invalid hexadecimal color"):
            parse_hex_color(text)


class TestRemoveKeyColor:
    """remove_key_color 測試"""

    @pytest.mark.unit
    def test_distance_ignores_alpha(self) -> None:
        pixels = _pixels((3, 4, 0, 0), (3, 4, 0, 255))
        assert color_distance(pixels, BLACK).tolist() == [[5.0, 5.0]]

    @pytest.mark.unit
    def test_zero_tolerance_only_exact_match(self) -> None:
        pixels = _pixels((0, 255, 0, 255), (1, 255, 0, 255), (0, 254, 0, 200))
        result = remove_key_color(pixels, (0, 255, 0), 0)
        assert result[0, :, 3].tolist() == [0, 255, 200]

    @pytest.mark.unit
    def test_exactly_tolerance_is_transparent(self) -> None:
        # 距離 = sqrt(36 + 64) = 10
        result = remove_key_color(_pixels((6, 8, 0, 255)), BLACK, 10)
        assert result[0, 0, 3] == 0

    @pytest.mark.unit
    def test_exactly_one_and_half_tolerance_keeps_alpha(self) -> None:
        # 距離 = sqrt(81 + 144) = 15 = 1.5T
        result = remove_key_color(_pixels((9, 12, 0, 200)), BLACK, 10)
        assert result[0, 0, 3] == 200

    @pytest.mark.unit
    def test_transition_band_is_linear(self) -> None:
        # 距離 = 13，factor = (13 - 10) / 5 = 0.6
        result = remove_key_color(_pixels((5, 12, 0, 200)), BLACK, 10)
        assert result[0, 0, 3] == 120

    @pytest.mark.unit
    def test_transition_band_rounds(self) -> None:
        # factor 0.6，alpha 101 -> 60.6 -> 61
        result = remove_key_color(_pixels((5, 12, 0, 101)), BLACK, 10)
        assert result[0, 0, 3] == 61

    @pytest.mark.unit
    def test_far_pixels_unchanged(self) -> None:
        pixels = _pixels((30, 40, 0, 77), (255, 255, 255, 255))
        result = remove_key_color(pixels, BLACK, 10)
        assert np.array_equal(result, pixels)

    @pytest.mark.unit
    def test_rgb_channels_untouched(self) -> None:
        pixels = _pixels((6, 8, 0, 255), (5, 12, 0, 255))
        result = remove_key_color(pixels, BLACK, 10)
        assert np.array_equal(result[:, :, :3], pixels[:, :, :3])

    @pytest.mark.unit
    def test_input_not_modified(self) -> None:
        pixels = _pixels((0, 0, 0, 255))
        remove_key_color(pixels, BLACK, 10)
        assert pixels[0, 0, 3] == 255

    @pytest.mark.unit
    def test_already_transparent_stays_transparent(self) -> None:
        result = remove_key_color(_pixels((5, 12, 0, 0)), BLACK, 10)
        assert result[0, 0, 3] == 0

    @pytest.mark.unit
    def test_max_tolerance_clears_everything(self) -> None:
        rng = np.random.default_rng(7)
        pixels = rng.integers(0, 256, size=(8, 8, 4), dtype=np.uint8)
        # 最大可能距離 sqrt(3) * 255 ≈ 441.7 < 1.5 * 255；<= 255 的全部透明
        result = remove_key_color(pixels, (128, 128, 128), 255)
        assert (result[:, :, 3] <= pixels[:, :, 3]).all()
        distance = color_distance(pixels, (128, 128, 128))
        assert (result[:, :, 3][distance <= 255] == 0).all()
