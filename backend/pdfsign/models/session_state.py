"""
会话状态 - 文档签署会话的生命周期

EDITING -> FINALIZING -> FINALIZED
FINALIZING -> EDITING （后端失败时回退）
"""

from __future__ import annotations

from enum import Enum


class SessionStatus(str, Enum):
    """会话状态枚举"""
    EDITING = "editing"          # 字段可编辑
    FINALIZING = "finalizing"    # 定稿中，禁止编辑
    FINALIZED = "finalized"      # 终态，只读


ALLOWED_TRANSITIONS: dict[SessionStatus, frozenset[SessionStatus]] = {
    SessionStatus.EDITING: frozenset({SessionStatus.FINALIZING}),
    SessionStatus.FINALIZING: frozenset({SessionStatus.FINALIZED, SessionStatus.EDITING}),
    SessionStatus.FINALIZED: frozenset(),
}


def can_transition(current: SessionStatus, target: SessionStatus) -> bool:
    """判断状态迁移是否合法"""
    return target in ALLOWED_TRANSITIONS[current]
