"""
字段模型 - 页面上放置的一个标注字段

坐标与尺寸均为渲染像素空间（页面左上角为原点，Y向下）。
字段不可变：所有编辑操作都返回新实例，由会话按id替换。
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from .viewport import Viewport


class FieldType(str, Enum):
    """字段类型（创建后不可更改）"""
    SIGNATURE = "signature"
    INITIALS = "initials"
    NAME = "name"
    DATE = "date"
    TEXT = "text"
    COMPANY = "company"


class FontId(str, Enum):
    """逻辑字体标识（渲染后端负责映射到具体字形）"""
    TIMES_ROMAN_ITALIC = "times-roman-italic"
    HELVETICA_BOLD = "helvetica-bold"
    HELVETICA_OBLIQUE = "helvetica-oblique"
    TIMES_ROMAN_BOLD = "times-roman-bold"
    COURIER_BOLD = "courier-bold"
    HELVETICA = "helvetica"


DEFAULT_FONT = FontId.TIMES_ROMAN_ITALIC

# 放置后需要弹出签名输入的类型
SIGNATURE_LIKE_TYPES = frozenset({FieldType.SIGNATURE, FieldType.INITIALS})


class SignField(BaseModel):
    """标注字段"""
    id: str = Field(..., description="创建时分配，编辑中保持不变")
    type: FieldType
    page: int = Field(..., ge=1, description="页码(从1开始)")

    # 渲染像素空间
    x: float
    y: float
    width: float
    height: float

    content: str = ""
    font: FontId | None = None
    font_size: float = Field(..., description="派生值，由字号估算器计算")

    # 放置/最近一次拖动或缩放时的视口
    viewport_snapshot: Viewport

    model_config = {"frozen": True}

    @property
    def is_complete(self) -> bool:
        """内容非空即可参与定稿"""
        return bool(self.content)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height
