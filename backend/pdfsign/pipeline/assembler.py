"""
定稿组装器 - 把字段换算为PDF点空间标注列表

职责：
1. 对每个已完成字段取其视口快照
2. 用坐标换算得到 PDF 点空间的 (x, y)
3. 组装成按页索引的渲染请求

不做页面边界钳制，也不处理文字溢出（由渲染后端负责）。

测试要点：
- test_assemble_scenario: 600x800 渲染页 -> 595x842 PDF
- test_zoom_invariance: 缩放不影响输出
"""

from __future__ import annotations

import logging
from typing import Iterable

from ..geometry import to_pdf_point
from ..models import AnnotationPayload, RenderRequest, SignField

logger = logging.getLogger(__name__)


class FinalizationAssembler:
    """定稿组装器"""

    def to_payload(self, field: SignField) -> AnnotationPayload:
        """单个字段 -> PDF点空间标注"""
        viewport = field.viewport_snapshot
        absolute_x, absolute_y = to_pdf_point(field.x, field.y, viewport)

        logger.debug(
            f"字段 {field.id} \"{field.content}\" 第{field.page}页: "
            f"canvas=({field.x:.2f}, {field.y:.2f}) -> pdf=({absolute_x:.2f}, {absolute_y:.2f}) "
            f"size={field.width:g}x{field.height:g} font_size={field.font_size:g}"
        )
        return AnnotationPayload(
            page=field.page,
            x=absolute_x,
            y=absolute_y,
            width=field.width,
            height=field.height,
            type=field.type,
            content=field.content,
            font=field.font,
            font_size=field.font_size,
        )

    def assemble(self, document_id: str, fields: Iterable[SignField]) -> RenderRequest:
        """
        组装定稿请求

        Args:
            document_id: 文档ID（对后端不透明）
            fields: 字段集合；内容为空的字段不输出

        Returns:
            渲染请求，标注按页码、再按字段顺序排列
        """
        complete = [f for f in fields if f.is_complete]
        ordered = sorted(enumerate(complete), key=lambda item: (item[1].page, item[0]))
        signatures = [self.to_payload(f) for _, f in ordered]

        logger.info(f"[{document_id}] 组装完成: {len(signatures)} 个标注")
        return RenderRequest(document_id=document_id, signatures=signatures)
