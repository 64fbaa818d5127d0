"""
视口提供者实现

- MeasuredViewportProvider: 由渲染面上报测得的像素尺寸（页面未测量前返回 None）
- PdfViewportProvider: 用 pypdf 读取原生页面尺寸，按缩放比推导渲染尺寸
"""

from __future__ import annotations

import logging
from pathlib import Path

from pypdf import PdfReader

from ..config import RuntimeConfig, get_config
from ..interfaces import IViewportProvider
from ..models import Viewport

logger = logging.getLogger(__name__)


class MeasuredViewportProvider(IViewportProvider):
    """渲染面测量结果的视口提供者"""

    def __init__(self, native_sizes: list[tuple[float, float]]):
        self.native_sizes = list(native_sizes)
        self._rendered: dict[int, tuple[float, float]] = {}

    def page_count(self) -> int:
        return len(self.native_sizes)

    def report_render(self, page: int, rendered_width: float, rendered_height: float) -> None:
        """渲染面完成一次渲染后上报测得尺寸"""
        self._check_page(page)
        self._rendered[page] = (rendered_width, rendered_height)

    def invalidate(self, page: int | None = None) -> None:
        """缩放等导致旧测量失效"""
        if page is None:
            self._rendered.clear()
        else:
            self._rendered.pop(page, None)

    def get_viewport(self, page: int) -> Viewport | None:
        if not 1 <= page <= self.page_count():
            return None
        rendered = self._rendered.get(page)
        if rendered is None:
            return None
        native_w, native_h = self.native_sizes[page - 1]
        viewport = Viewport(
            page_number=page,
            rendered_width=rendered[0],
            rendered_height=rendered[1],
            native_width=native_w,
            native_height=native_h,
        )
        return viewport if viewport.is_ready else None

    def _check_page(self, page: int) -> None:
        if not 1 <= page <= self.page_count():
            raise ValueError(f"页码超出范围: {page} (共{self.page_count()}页)")


class PdfViewportProvider(MeasuredViewportProvider):
    """按缩放比推导渲染尺寸的视口提供者"""

    def __init__(
        self,
        pdf_path: str | Path,
        zoom: float | None = None,
        config: RuntimeConfig | None = None,
    ):
        self.config = config or get_config()
        reader = PdfReader(str(pdf_path))
        sizes = [(float(p.mediabox.width), float(p.mediabox.height)) for p in reader.pages]
        super().__init__(sizes)
        self.zoom = self.config.clamp_zoom(zoom if zoom is not None else self.config.editor.default_zoom)
        self._render_all()
        logger.info(f"加载页面尺寸: {pdf_path} 共{len(sizes)}页, zoom={self.zoom:.2f}")

    def set_zoom(self, zoom: float) -> float:
        """设置缩放比（限制在编辑器范围内），返回实际生效值"""
        self.zoom = round(self.config.clamp_zoom(zoom), 4)
        self._render_all()
        return self.zoom

    def zoom_in(self) -> float:
        return self.set_zoom(self.zoom + self.config.editor.zoom_step)

    def zoom_out(self) -> float:
        return self.set_zoom(self.zoom - self.config.editor.zoom_step)

    def _render_all(self) -> None:
        self.invalidate()
        for page, (w, h) in enumerate(self.native_sizes, start=1):
            self.report_render(page, w * self.zoom, h * self.zoom)
