"""
文档定稿器 - 驱动会话状态机并调用渲染后端

流程：
1. 前置检查（至少一个字段且全部填写），不通过则保持 EDITING
2. EDITING -> FINALIZING，禁止编辑
3. 组装请求并调用渲染后端（唯一的异步操作）
4. 成功 -> FINALIZED；失败 -> 回到 EDITING，字段保持原样

不做自动重试，失败由用户重新发起。

测试要点：
- test_finalize_success: 成功定稿
- test_backend_failure_reverts: 后端失败回退
- test_concurrent_finalize_rejected: 定稿中重复提交被拒绝
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from ..interfaces import BackendFailureError
from ..models import RenderResult
from .assembler import FinalizationAssembler

if TYPE_CHECKING:
    from ..interfaces import IRenderBackend
    from ..session import EditSession

logger = logging.getLogger(__name__)

MSG_BACKEND_FAILURE = "Failed to finalize document"


class DocumentFinalizer:
    """文档定稿器"""

    def __init__(
        self,
        backend: IRenderBackend,
        assembler: FinalizationAssembler | None = None,
    ):
        self.backend = backend
        self.assembler = assembler or FinalizationAssembler()

    async def finalize(self, session: EditSession) -> RenderResult:
        """
        定稿

        Raises:
            EmptyFieldSetError / IncompleteFieldError: 前置检查不通过
            SessionStateError: 会话不在编辑态（含定稿进行中）
            BackendFailureError: 渲染后端失败（会话已回到编辑态）
        """
        session.begin_finalizing()
        logger.info(f"[{session.document_id}] 开始定稿: {len(session.fields)} 个字段")

        try:
            request = self.assembler.assemble(session.document_id, session.fields)
            result = await self.backend.render(request)
            if not result.success:
                raise BackendFailureError("渲染后端返回 success=false")
        except BackendFailureError as e:
            logger.error(f"[{session.document_id}] 定稿失败: {e}")
            session.revert_to_editing(MSG_BACKEND_FAILURE)
            raise
        except Exception as e:
            logger.exception(f"[{session.document_id}] 定稿异常")
            session.revert_to_editing(MSG_BACKEND_FAILURE)
            raise BackendFailureError(str(e)) from e
        except asyncio.CancelledError:
            session.revert_to_editing(MSG_BACKEND_FAILURE)
            raise

        session.mark_finalized(result.signed_file_url)
        logger.info(f"[{session.document_id}] 定稿完成: {result.signed_file_url}")
        return result
