"""
設定模組
"""

from .app import AppSettings, settings


__all__ = ["AppSettings", "settings"]
