"""
錯誤類型模組

三種錯誤類別：
- ValidationError: 呼叫端輸入格式錯誤（顏色字串、格式名稱、檔案不存在）
- DataError: 輸入資料無法解碼為圖片
- SystemFailureError: 任何 I/O 失敗（讀取中繼資料、建立資料夾、寫檔）

公開指令邊界將上述錯誤收斂為 CommandError（純文字訊息）
"""


class PixelsmithError(Exception):
    """所有內部錯誤的基底類別"""

    kind: str = "Application"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind} error: {self.message}"


class ValidationError(PixelsmithError):
    """呼叫端輸入不合法，在任何破壞性操作前偵測"""

    kind = "Validation"


class DataError(PixelsmithError):
    """輸入位元組無法解碼為圖片"""

    kind = "Data"


class SystemFailureError(PixelsmithError):
    """I/O 失敗，訊息中包含底層 OS 錯誤"""

    kind = "System"


class CommandError(Exception):
    """
    公開指令的失敗結果

    只攜帶給使用者看的訊息字串

    Attributes:
        message: 錯誤訊息
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
