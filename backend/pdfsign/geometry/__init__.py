"""
几何模块 - 坐标换算、字段几何操作与动态字号估算

子模块：
- transform: 渲染像素 <-> PDF点 换算
- field_ops: 放置/移动/缩放/内容规整
- font_fit: 单行字号估算
"""

from .field_ops import (
    move,
    normalize_content,
    place,
    rebase_to_viewport,
    resize,
    set_content,
    set_font,
)
from .font_fit import estimate_font_size, font_size_for_content
from .transform import ensure_ready, scale_factors, to_pdf_point, to_pdf_size, to_rendered_point

__all__ = [
    "to_pdf_point",
    "to_rendered_point",
    "to_pdf_size",
    "scale_factors",
    "ensure_ready",
    "place",
    "move",
    "resize",
    "set_content",
    "set_font",
    "normalize_content",
    "rebase_to_viewport",
    "estimate_font_size",
    "font_size_for_content",
]
