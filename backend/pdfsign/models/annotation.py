"""
渲染后端契约 - 定稿请求与响应

字段名按后端约定序列化为 camelCase（documentId / fontSize / signedFileUrl）。
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from .field import FieldType, FontId


class AnnotationPayload(BaseModel):
    """单个标注（PDF点空间坐标）"""
    page: int = Field(..., ge=1)
    x: float = Field(..., description="PDF点空间X")
    y: float = Field(..., description="PDF点空间Y(原点左下)")
    width: float
    height: float
    type: FieldType
    content: str
    font: FontId | None = None
    font_size: float = Field(..., alias="fontSize")

    model_config = {"populate_by_name": True, "frozen": True}


class RenderRequest(BaseModel):
    """定稿请求"""
    document_id: str = Field(..., alias="documentId")
    signatures: list[AnnotationPayload] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    def to_wire(self) -> dict[str, Any]:
        """序列化为后端请求体"""
        return self.model_dump(mode="json", by_alias=True)

    def pages(self) -> list[int]:
        """涉及的页码（升序去重）"""
        return sorted({s.page for s in self.signatures})


class RenderResult(BaseModel):
    """定稿成功响应"""
    success: bool
    signed_file_url: str = Field(..., alias="signedFileUrl", min_length=1)
    message: str | None = None

    model_config = {"populate_by_name": True}
