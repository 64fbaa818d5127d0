"""
数据模型层 - 定义系统核心数据结构

所有模块通过这些模型交互，实现解耦：
- Viewport: 单页视口（渲染像素尺寸+原生点尺寸）
- SignField: 页面上的标注字段
- RenderRequest/AnnotationPayload: 定稿请求
- SessionStatus: 签署会话状态
"""

from .annotation import AnnotationPayload, RenderRequest, RenderResult
from .field import DEFAULT_FONT, SIGNATURE_LIKE_TYPES, FieldType, FontId, SignField
from .session_state import SessionStatus, can_transition
from .viewport import Viewport

__all__ = [
    "Viewport",
    "SignField",
    "FieldType",
    "FontId",
    "DEFAULT_FONT",
    "SIGNATURE_LIKE_TYPES",
    "AnnotationPayload",
    "RenderRequest",
    "RenderResult",
    "SessionStatus",
    "can_transition",
]
