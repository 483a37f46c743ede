"""
格式轉換管線測試
"""

import asyncio
from collections.abc import Callable
from pathlib import Path

import pytest
from PIL import Image

from pixelsmith.data_model import ConversionOptions, ImageFormat
from pixelsmith.errors import DataError, ValidationError
from pixelsmith.features.image_conversion.pipeline import run_conversion

from tests.conftest import RecordingProgress


CHECKPOINTS = [20, 40, 60, 70, 90, 100]


class TestConversionE2E:
    """端到端轉換"""

    @pytest.mark.e2e
    def test_png_to_jpeg_quality_50(
        self, noise_png: Path, tmp_path: Path, progress: RecordingProgress
    ) -> None:
        output = tmp_path / "out" / "noise.jpg"
        options = ConversionOptions(output_format="jpeg", quality=50)

        result = asyncio.run(run_conversion(noise_png, output, options, progress))

        assert result.success is True
        assert result.input_format == "PNG"
        assert result.output_format == "JPEG"
        assert result.size_before == noise_png.stat().st_size
        assert result.size_after == output.stat().st_size
        assert result.size_after <= result.size_before
        assert result.size_reduction_percent >= 0
        assert result.input_path == str(noise_png)
        assert result.output_path == str(output)
        with Image.open(output) as written:
            assert written.format == "JPEG"

    @pytest.mark.e2e
    def test_progress_checkpoints(
        self, noise_png: Path, tmp_path: Path, progress: RecordingProgress
    ) -> None:
        options = ConversionOptions(output_format="png")
        asyncio.run(run_conversion(noise_png, tmp_path / "x.png", options, progress))

        assert progress.percents == CHECKPOINTS
        assert len(progress.successes) == 1
        assert progress.errors == []
        assert "reduction" in progress.successes[0]

    @pytest.mark.e2e
    @pytest.mark.parametrize("fmt", ["webp", "bmp", "tiff", "gif", "PNG"])
    def test_other_formats(
        self, make_image: Callable[..., Path], tmp_path: Path, fmt: str
    ) -> None:
        source = make_image("src.jpg", size=(10, 6))
        output = tmp_path / f"dst.{fmt.lower()}"
        result = asyncio.run(
            run_conversion(source, output, ConversionOptions(output_format=fmt))
        )
        assert result.input_format is ImageFormat.JPEG
        with Image.open(output) as written:
            assert written.format == result.output_format.pillow_name
            assert written.size == (10, 6)


class TestResizeStep:
    """縮放步驟"""

    @pytest.mark.integration
    def test_preserve_aspect_never_upscales(
        self, make_image: Callable[..., Path], tmp_path: Path
    ) -> None:
        source = make_image("src.png", size=(100, 50))
        output = tmp_path / "dst.png"
        options = ConversionOptions(
            output_format="png", max_width=400, max_height=400, preserve_aspect=True
        )
        asyncio.run(run_conversion(source, output, options))
        with Image.open(output) as written:
            assert written.size[0] <= 100
            assert written.size[1] <= 50

    @pytest.mark.integration
    def test_exact_resize(self, make_image: Callable[..., Path], tmp_path: Path) -> None:
        source = make_image("src.png", size=(100, 50))
        output = tmp_path / "dst.png"
        options = ConversionOptions(
            output_format="png", max_width=30, max_height=40, preserve_aspect=False
        )
        asyncio.run(run_conversion(source, output, options))
        with Image.open(output) as written:
            assert written.size == (30, 40)

    @pytest.mark.integration
    @pytest.mark.parametrize(
        "bounds", [{"max_width": 10}, {"max_height": 10}]
    )
    def test_single_bound_skips_resize(
        self,
        make_image: Callable[..., Path],
        tmp_path: Path,
        progress: RecordingProgress,
        bounds: dict[str, int],
    ) -> None:
        source = make_image("src.png", size=(100, 50))
        output = tmp_path / "dst.png"
        options = ConversionOptions(output_format="png", **bounds)
        asyncio.run(run_conversion(source, output, options, progress))
        with Image.open(output) as written:
            assert written.size == (100, 50)
        assert (60, "No resizing needed") in progress.updates


class TestConversionErrors:
    """錯誤處理"""

    @pytest.mark.integration
    def test_missing_input(self, tmp_path: Path, progress: RecordingProgress) -> None:
        with pytest.raises(ValidationError, match="Source file does not exist"):
            asyncio.run(
                run_conversion(
                    tmp_path / "missing.png",
                    tmp_path / "out.png",
                    ConversionOptions(output_format="png"),
                    progress,
                )
            )
        assert len(progress.errors) == 1
        assert progress.successes == []

    @pytest.mark.integration
    def test_unsupported_output_format(
        self, noise_png: Path, tmp_path: Path, progress: RecordingProgress
    ) -> None:
        output = tmp_path / "out.xyz"
        with pytest.raises(ValidationError, match="Unsupported format: xyz"):
            asyncio.run(
                run_conversion(
                    noise_png, output, ConversionOptions(output_format="xyz"), progress
                )
            )
        assert not output.exists()
        assert progress.errors == ["Unsupported format: xyz"]
        assert 90 not in progress.percents

    @pytest.mark.integration
    def test_undecodable_input(self, tmp_path: Path, progress: RecordingProgress) -> None:
        source = tmp_path / "broken.png"
        source.write_bytes(b"\x00" * 32)
        with pytest.raises(DataError):
            asyncio.run(
                run_conversion(
                    source,
                    tmp_path / "out.png",
                    ConversionOptions(output_format="png"),
                    progress,
                )
            )
        assert len(progress.errors) == 1

    @pytest.mark.integration
    def test_unrecognized_input_extension(
        self, make_image: Callable[..., Path], tmp_path: Path
    ) -> None:
        source = make_image("src.raw", image_format="PNG")
        output = tmp_path / "out.png"
        with pytest.raises(ValidationError, match="Unrecognized file extension"):
            asyncio.run(
                run_conversion(source, output, ConversionOptions(output_format="png"))
            )
        assert not output.exists()

    @pytest.mark.integration
    def test_oversized_input_reports_error(
        self,
        make_image: Callable[..., Path],
        tmp_path: Path,
        progress: RecordingProgress,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        source = make_image("huge.png", size=(16, 16))
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10)
        with pytest.raises(DataError, match="Unable to load image"):
            asyncio.run(
                run_conversion(
                    source,
                    tmp_path / "out.png",
                    ConversionOptions(output_format="png"),
                    progress,
                )
            )
        assert len(progress.errors) == 1
        assert progress.successes == []


class TestModeNormalization:
    """來源模式與目標格式不相容"""

    @pytest.mark.e2e
    def test_grayscale_alpha_png_to_bmp(
        self, make_image: Callable[..., Path], tmp_path: Path
    ) -> None:
        source = make_image("gray.png", size=(8, 4), color=(100, 200), mode="LA")
        output = tmp_path / "gray.bmp"
        result = asyncio.run(
            run_conversion(source, output, ConversionOptions(output_format="bmp"))
        )
        assert result.output_format is ImageFormat.BMP
        with Image.open(output) as written:
            assert written.format == "BMP"
            assert written.size == (8, 4)
            assert written.getpixel((0, 0))[:3] == (100, 100, 100)

    @pytest.mark.e2e
    def test_cmyk_tiff_to_png(self, make_image: Callable[..., Path], tmp_path: Path) -> None:
        source = make_image("print.tiff", color=(0, 0, 0, 0), mode="CMYK")
        output = tmp_path / "print.png"
        asyncio.run(run_conversion(source, output, ConversionOptions(output_format="png")))
        with Image.open(output) as written:
            assert written.mode == "RGB"
