"""
字体映射 - 逻辑字体标识 -> PDF 标准14字体

核心只把字体当作不透明枚举；只有渲染端才需要真实字宽。
"""

from __future__ import annotations

from reportlab.pdfbase import pdfmetrics

from ..models import DEFAULT_FONT, FontId

STANDARD_FONTS: dict[FontId, str] = {
    FontId.TIMES_ROMAN_ITALIC: "Times-Italic",
    FontId.HELVETICA_BOLD: "Helvetica-Bold",
    FontId.HELVETICA_OBLIQUE: "Helvetica-Oblique",
    FontId.TIMES_ROMAN_BOLD: "Times-Bold",
    FontId.COURIER_BOLD: "Courier-Bold",
    FontId.HELVETICA: "Helvetica",
}


def standard_font(font: FontId | str | None) -> str:
    """逻辑字体 -> 标准字体名；未知或为空时使用默认字体"""
    try:
        font_id = FontId(font) if font else DEFAULT_FONT
    except ValueError:
        font_id = DEFAULT_FONT
    return STANDARD_FONTS[font_id]


def text_width(text: str, font: FontId | str | None, font_size: float) -> float:
    """按真实字宽计算单行文本宽度(pt)"""
    return pdfmetrics.stringWidth(text, standard_font(font), font_size)
