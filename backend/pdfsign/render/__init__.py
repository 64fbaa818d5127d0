"""
渲染适配层 - 页面渲染面与渲染后端的具体实现

子模块：
- viewport_provider: 视口提供者（测量上报 / pypdf读取+缩放）
- http_backend: HTTP 渲染后端客户端
- pdf_renderer: 本地渲染后端（pypdf + reportlab）
- fonts: 逻辑字体映射与字宽
"""

from .fonts import STANDARD_FONTS, standard_font, text_width
from .http_backend import HttpRenderBackend, parse_render_response
from .pdf_renderer import LocalPdfRenderer
from .viewport_provider import MeasuredViewportProvider, PdfViewportProvider

__all__ = [
    "MeasuredViewportProvider",
    "PdfViewportProvider",
    "HttpRenderBackend",
    "parse_render_response",
    "LocalPdfRenderer",
    "STANDARD_FONTS",
    "standard_font",
    "text_width",
]
