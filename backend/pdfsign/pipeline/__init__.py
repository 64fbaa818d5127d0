"""
定稿流水线 - 会话管理与定稿执行

子模块：
- assembler: 字段 -> PDF点空间标注
- finalizer: 驱动状态机并调用渲染后端
- session_manager: 会话管理
"""

from .assembler import FinalizationAssembler
from .finalizer import MSG_BACKEND_FAILURE, DocumentFinalizer
from .session_manager import SessionManager

__all__ = [
    "FinalizationAssembler",
    "DocumentFinalizer",
    "MSG_BACKEND_FAILURE",
    "SessionManager",
]
