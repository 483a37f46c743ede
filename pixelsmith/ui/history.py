"""
歷史記錄模組

記住最近使用的輸入路徑：單張操作用的圖片檔與批次操作用的資料夾分開保存，
選單只列出同類且仍然存在的路徑
"""

from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic import ValidationError as SchemaError

from pixelsmith.data_model import is_supported_image


_HISTORY_FILE = "path_history.json"
_MAX_ENTRIES = 10


class PathKind(StrEnum):
    """歷史路徑類型"""

    FILE = "files"
    FOLDER = "folders"


class _HistoryData(BaseModel):
    """歷史檔案內容"""

    files: list[str] = Field(default_factory=list)
    folders: list[str] = Field(default_factory=list)


def _is_usable(path: Path, kind: PathKind) -> bool:
    if kind is PathKind.FOLDER:
        return path.is_dir()
    return path.is_file() and is_supported_image(path)


class PathHistory:
    """
    路徑歷史管理

    Attributes:
        max_entries: 每種類型最多保留的筆數
    """

    def __init__(self, base_dir: Path | None = None, max_entries: int = _MAX_ENTRIES):
        """
        初始化路徑歷史

        Args:
            base_dir: 歷史檔案所在目錄，預設為目前工作目錄
            max_entries: 每種類型最多保留的筆數
        """
        self._history_file = (base_dir or Path.cwd()) / _HISTORY_FILE
        self.max_entries = max_entries

    def _read(self) -> _HistoryData:
        # 檔案不存在或內容損毀時視為空白歷史
        try:
            text = self._history_file.read_text(encoding="utf-8")
            return _HistoryData.model_validate_json(text)
        except (OSError, SchemaError):
            return _HistoryData()

    def recent(self, kind: PathKind, limit: int | None = None) -> list[Path]:
        """
        最近使用的路徑（最新在前）

        已刪除或類型不符的路徑會被略過

        Args:
            kind: 圖片檔或資料夾
            limit: 最多回傳筆數

        Returns:
            路徑列表
        """
        entries = getattr(self._read(), kind.value)
        paths = [p for p in map(Path, entries) if _is_usable(p, kind)]
        return paths[:limit] if limit is not None else paths

    def remember(self, path: Path) -> PathKind | None:
        """
        記錄一個輸入路徑

        依路徑實際類型歸入圖片檔或資料夾；同一路徑只保留最新一筆

        Args:
            path: 輸入圖片或資料夾

        Returns:
            歸入的類型；路徑不存在或不是支援的圖片時回傳 None（不記錄）
        """
        resolved = path.resolve()
        kind = PathKind.FOLDER if resolved.is_dir() else PathKind.FILE
        if not _is_usable(resolved, kind):
            return None

        data = self._read()
        others = [p for p in getattr(data, kind.value) if Path(p) != resolved]
        updated = data.model_copy(
            update={kind.value: [str(resolved), *others][: self.max_entries]}
        )

        self._history_file.parent.mkdir(parents=True, exist_ok=True)
        self._history_file.write_text(
            updated.model_dump_json(indent=2) + "\n", encoding="utf-8"
        )
        return kind
