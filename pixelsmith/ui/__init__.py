"""
使用者介面模組
"""

from .history import PathHistory, PathKind
from .modern import ModernUI, Operation, OperationRequest


__all__ = [
    "ModernUI",
    "Operation",
    "OperationRequest",
    "PathHistory",
    "PathKind",
]
