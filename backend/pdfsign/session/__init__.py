"""
会话模块 - 每个打开文档一个显式的编辑会话对象
"""

from .edit_session import MSG_EMPTY_FIELD_SET, MSG_INCOMPLETE_FIELD, EditSession, Interaction

__all__ = [
    "EditSession",
    "Interaction",
    "MSG_EMPTY_FIELD_SET",
    "MSG_INCOMPLETE_FIELD",
]
