"""
檔案工具測試
"""

import asyncio
from pathlib import Path

import pytest

from pixelsmith.core.files import (
    create_directory,
    file_exists,
    file_size,
    format_file_size,
)
from pixelsmith.errors import SystemFailureError


class TestFormatFileSize:
    """format_file_size 測試"""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (0, "0 B"),
            (512, "512 B"),
            (1023, "1023 B"),
            (1024, "1.0 KB"),
            (1536, "1.5 KB"),
            (1024 * 1024, "1.0 MB"),
            (5 * 1024**3, "5.0 GB"),
            (2 * 1024**4, "2.0 TB"),
        ],
    )
    def test_units(self, size: int, expected: str) -> None:
        assert format_file_size(size) == expected


class TestFilePrimitives:
    """非同步檔案原語"""

    @pytest.mark.unit
    def test_exists(self, tmp_path: Path) -> None:
        target = tmp_path / "a.txt"
        assert asyncio.run(file_exists(target)) is False
        target.write_text("x", encoding="utf-8")
        assert asyncio.run(file_exists(target)) is True

    @pytest.mark.unit
    def test_create_nested_directory(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "c"
        asyncio.run(create_directory(target))
        assert target.is_dir()
        # 已存在時不報錯
        asyncio.run(create_directory(target))

    @pytest.mark.unit
    def test_create_directory_over_file(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("x", encoding="utf-8")
        with pytest.raises(SystemFailureError, match="Unable to create directory"):
            asyncio.run(create_directory(blocker / "child"))

    @pytest.mark.unit
    def test_size(self, tmp_path: Path) -> None:
        target = tmp_path / "data.bin"
        target.write_bytes(b"0123456789")
        assert asyncio.run(file_size(target)) == 10

    @pytest.mark.unit
    def test_size_missing(self, tmp_path: Path) -> None:
        with pytest.raises(SystemFailureError, match="Unable to read the output file"):
            asyncio.run(file_size(tmp_path / "missing", what="output file"))
