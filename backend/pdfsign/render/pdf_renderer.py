"""
本地PDF渲染器 - 渲染后端契约的参考实现

职责：
1. 跳过内容为空或页码越界的标注
2. 把 (x, y) 钳制到安全边距内
3. 文字按真实字宽会溢出页面时左移X
4. 使用请求给出的字体与字号（不重新计算）
5. 每页生成一张覆盖层并合并，写出签署后的PDF

依赖：
- pypdf: 读取/合并/写出PDF
- reportlab: 绘制文字覆盖层
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections import defaultdict
from io import BytesIO
from pathlib import Path

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PdfReadError
from reportlab.pdfgen import canvas

from ..config import get_config
from ..config.runtime_config import RendererConfig
from ..geometry import normalize_content
from ..interfaces import BackendFailureError, IRenderBackend
from ..models import AnnotationPayload, RenderRequest, RenderResult
from .fonts import standard_font, text_width

logger = logging.getLogger(__name__)


class LocalPdfRenderer(IRenderBackend):
    """本地PDF渲染器"""

    def __init__(
        self,
        source_pdf: str | Path,
        output_dir: str | Path | None = None,
        config: RendererConfig | None = None,
    ):
        self.config = config or get_config().renderer
        self.source_pdf = Path(source_pdf)
        self.output_dir = Path(output_dir or self.config.output_dir)

    async def render(self, request: RenderRequest) -> RenderResult:
        return await asyncio.to_thread(self.render_sync, request)

    def render_sync(self, request: RenderRequest) -> RenderResult:
        """同步渲染并写出签署后的PDF"""
        try:
            reader = PdfReader(str(self.source_pdf))
        except (OSError, PdfReadError) as e:
            raise BackendFailureError(f"无法读取PDF: {self.source_pdf}: {e}") from e

        page_count = len(reader.pages)
        by_page: dict[int, list[AnnotationPayload]] = defaultdict(list)
        for sig in request.signatures:
            if not sig.content.strip() or not 1 <= sig.page <= page_count:
                logger.warning(f"[{request.document_id}] 跳过无效标注: page={sig.page}")
                continue
            by_page[sig.page].append(sig)

        writer = PdfWriter()
        for index, page in enumerate(reader.pages, start=1):
            items = by_page.get(index)
            if items:
                box = page.mediabox
                overlay = self._make_overlay(float(box.width), float(box.height), items)
                page.merge_page(PdfReader(BytesIO(overlay)).pages[0])
            writer.add_page(page)

        self.output_dir.mkdir(parents=True, exist_ok=True)
        out_path = self.output_dir / f"signed_{int(time.time() * 1000)}_{self.source_pdf.name}"
        try:
            with open(out_path, "wb") as f:
                writer.write(f)
        except OSError as e:
            raise BackendFailureError(f"写出PDF失败: {out_path}: {e}") from e

        logger.info(f"[{request.document_id}] 已写出: {out_path}")
        return RenderResult(
            success=True,
            signed_file_url=str(out_path),
            message="PDF signed with accurate positioning",
        )

    def resolve_origin(
        self,
        sig: AnnotationPayload,
        page_w: float,
        page_h: float,
        width_of_text: float,
    ) -> tuple[float, float]:
        """钳制到安全边距，并在文字溢出页面右侧时左移"""
        cfg = self.config
        x = max(cfg.margin_left, min(sig.x, page_w - cfg.margin_right))
        y = max(cfg.margin_bottom, min(sig.y, page_h - cfg.margin_top))
        x = min(x, page_w - width_of_text - cfg.overflow_margin)
        return x, y

    def _make_overlay(
        self,
        page_w: float,
        page_h: float,
        items: list[AnnotationPayload],
    ) -> bytes:
        buf = BytesIO()
        c = canvas.Canvas(buf, pagesize=(page_w, page_h))
        c.setFillColorRGB(0, 0, 0)

        for sig in items:
            text = normalize_content(sig.content)
            font_size = sig.font_size if sig.font_size > 0 else self.config.default_font_size
            width = text_width(text, sig.font, font_size)
            x, y = self.resolve_origin(sig, page_w, page_h, width)

            c.setFont(standard_font(sig.font), font_size)
            c.drawString(x, y, text)
            logger.debug(
                f"绘制 \"{text}\" 第{sig.page}页 ({x:.2f}, {y:.2f}) "
                f"{standard_font(sig.font)} {font_size:g}pt"
            )

        c.save()
        return buf.getvalue()
