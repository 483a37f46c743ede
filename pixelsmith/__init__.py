"""
pixelsmith - 圖片格式轉換與色鍵去背工具
"""

__version__ = "0.1.0"
