"""
HTTP 渲染后端客户端

POST {base_url}{endpoint}，JSON 请求体为 {documentId, signatures}。
只有 2xx 且响应为 {success: true, signedFileUrl: ...} 才算成功，
其余情况（网络错误、非2xx、非JSON、字段缺失）一律抛 BackendFailureError。
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from ..config import get_config
from ..config.runtime_config import BackendConfig
from ..interfaces import BackendFailureError, IRenderBackend
from ..models import RenderRequest, RenderResult

logger = logging.getLogger(__name__)


def parse_render_response(response: httpx.Response) -> RenderResult:
    """校验并解析后端响应"""
    if not response.is_success:
        raise BackendFailureError(
            f"渲染后端返回 {response.status_code}: {response.text[:200]}"
        )
    try:
        data: Any = response.json()
    except ValueError as e:
        raise BackendFailureError("渲染后端响应不是JSON") from e

    if not isinstance(data, dict) or data.get("success") is not True:
        raise BackendFailureError(f"渲染后端响应格式错误: {str(data)[:200]}")
    try:
        return RenderResult.model_validate(data)
    except ValidationError as e:
        raise BackendFailureError(f"渲染后端响应缺少字段: {e}") from e


class HttpRenderBackend(IRenderBackend):
    """HTTP 渲染后端"""

    def __init__(
        self,
        config: BackendConfig | None = None,
        access_token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config or get_config().backend
        self.access_token = access_token if access_token is not None else self.config.access_token
        self.transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    async def render(self, request: RenderRequest) -> RenderResult:
        logger.info(
            f"[{request.document_id}] 提交渲染后端: {len(request.signatures)} 个标注 -> "
            f"{self.config.base_url}{self.config.endpoint}"
        )
        try:
            async with httpx.AsyncClient(
                base_url=self.config.base_url,
                timeout=self.config.timeout_sec,
                transport=self.transport,
            ) as client:
                response = await client.post(
                    self.config.endpoint,
                    json=request.to_wire(),
                    headers=self._headers(),
                )
        except httpx.HTTPError as e:
            raise BackendFailureError(f"渲染后端请求失败: {e}") from e

        return parse_render_response(response)
