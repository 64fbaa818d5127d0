"""
动态字号估算 - 单行文本填满字段框且不溢出

算法：
1. 按类型由框高得到基础字号：clamp(height * ratio, min_font, max_font)
2. 宽度修正：估算文本宽度 = 字符数 * 字号 * 0.6；
   超过 width - 16 时改为 (width - 16) / (字符数 * 0.6)，下限8
3. 四舍五入到整数
4. 空内容按名义长度10估算（占位时字号稳定）

该值既用于预览，也原样发给渲染后端，后端不再重新计算。
"""

from __future__ import annotations

import math

from ..config import FieldRules, load_rules
from ..models import FieldType


def round_half_up(value: float) -> int:
    """四舍五入（.5 向上）"""
    return int(math.floor(value + 0.5))


def estimate_font_size(
    width: float,
    height: float,
    field_type: FieldType | str,
    content_length: int | None = None,
    rules: FieldRules | None = None,
) -> int:
    """
    估算字段字号

    Args:
        width: 框宽(px)
        height: 框高(px)
        field_type: 字段类型
        content_length: 内容字符数；None或0时使用名义长度
        rules: 字段规则，默认加载配置

    Returns:
        整数字号
    """
    rules = rules or load_rules()
    type_rule = rules.rule_for(field_type)
    fit = rules.font_fit

    length = content_length or fit.placeholder_length

    base = min(max(height * type_rule.height_ratio, type_rule.min_font), type_rule.max_font)

    available = width - fit.horizontal_padding
    estimated_width = length * base * fit.glyph_width_ratio
    if estimated_width > available:
        base = max(fit.min_fit_font, available / (length * fit.glyph_width_ratio))

    return round_half_up(base)


def font_size_for_content(
    width: float,
    height: float,
    field_type: FieldType | str,
    content: str,
    rules: FieldRules | None = None,
) -> int:
    """按当前内容估算字号"""
    return estimate_font_size(width, height, field_type, len(content), rules)
