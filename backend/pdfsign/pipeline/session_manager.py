"""
会话管理器 - 会话创建/查询/丢弃

职责：
1. 为每个打开的文档创建独立的编辑会话
2. 会话查询与列表
3. 丢弃会话（字段随之销毁）

会话之间不共享可变状态，只保存在内存中。

测试要点：
- test_create_session: 创建会话
- test_sessions_independent: 会话互不影响
- test_discard_session: 丢弃会话
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..config import FieldRules, get_config, load_rules
from ..models import SessionStatus
from ..session import EditSession

if TYPE_CHECKING:
    from ..interfaces import IViewportProvider


class SessionManager:
    """会话管理器"""

    def __init__(self, rules: FieldRules | None = None):
        self.config = get_config()
        self.rules = rules or load_rules(self.config.rules_path)
        self._sessions: dict[str, EditSession] = {}

    def open_session(
        self,
        document_id: str,
        viewport_provider: IViewportProvider,
    ) -> EditSession:
        """打开文档会话（已存在时返回原会话）"""
        session = self._sessions.get(document_id)
        if session is not None:
            return session

        session = EditSession(
            document_id,
            viewport_provider,
            rules=self.rules,
            date_format=self.config.editor.date_format,
        )
        self._sessions[document_id] = session
        return session

    def get_session(self, document_id: str) -> EditSession | None:
        """获取会话"""
        return self._sessions.get(document_id)

    def discard_session(self, document_id: str) -> bool:
        """丢弃会话"""
        return self._sessions.pop(document_id, None) is not None

    def list_sessions(self, status: SessionStatus | None = None) -> list[EditSession]:
        """列出会话"""
        sessions = list(self._sessions.values())
        if status:
            sessions = [s for s in sessions if s.status == status]
        return sessions
