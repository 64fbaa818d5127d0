"""
模块接口契约 - 定义各模块的抽象接口

设计原则：
1. 核心只依赖接口，不直接依赖页面渲染面或渲染后端
2. 每个接口定义清晰的输入输出类型
3. 便于单元测试和mock替换

使用方式：
    from pdfsign.interfaces import IViewportProvider

    class MySurface(IViewportProvider):
        def get_viewport(self, page: int) -> Viewport | None:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import RenderRequest, RenderResult, Viewport


# ============================================================================
# 页面渲染面接口
# ============================================================================

class IViewportProvider(ABC):
    """视口提供者接口 - 暴露某页当前的渲染尺寸与原生尺寸"""

    @abstractmethod
    def get_viewport(self, page: int) -> Viewport | None:
        """
        获取页面视口

        Args:
            page: 页码(从1开始)

        Returns:
            当前渲染下的视口；页面尚未完成测量时返回 None
        """
        ...

    @abstractmethod
    def page_count(self) -> int:
        """文档总页数"""
        ...


# ============================================================================
# 渲染后端接口
# ============================================================================

class IRenderBackend(ABC):
    """渲染后端接口 - 把定稿标注落到PDF上"""

    @abstractmethod
    async def render(self, request: RenderRequest) -> RenderResult:
        """
        提交定稿请求

        Args:
            request: 页索引的PDF点空间标注列表

        Returns:
            成功响应（含签署后文件地址）

        Raises:
            BackendFailureError: 网络错误、非成功响应或响应格式错误
        """
        ...


# ============================================================================
# 异常定义
# ============================================================================

class PdfSignError(Exception):
    """基础异常"""
    pass


class NotReadyError(PdfSignError):
    """页面尚未测得有效尺寸"""
    pass


class TransformDegenerateError(NotReadyError):
    """换算时尺寸为零或无效"""
    pass


class OutOfBoundsError(PdfSignError):
    """点击位置不在渲染页面内"""
    pass


class FinalizationBlockedError(PdfSignError):
    """定稿前置条件不满足"""
    pass


class IncompleteFieldError(FinalizationBlockedError):
    """存在未填写内容的字段"""
    pass


class EmptyFieldSetError(FinalizationBlockedError):
    """没有任何字段"""
    pass


class BackendFailureError(PdfSignError):
    """渲染后端调用失败"""
    pass


class SessionStateError(PdfSignError):
    """当前会话状态不允许该操作"""
    pass


class FieldNotFoundError(PdfSignError):
    """字段不存在"""
    pass


class InvalidFontError(PdfSignError):
    """不在支持列表中的字体"""
    pass
