"""
字段几何操作 - 放置/移动/缩放/改内容，并保证边界约束

约束：
1. 包含：0 <= x, 0 <= y, x + width <= rendered_width, y + height <= rendered_height
2. 缩放后 width >= 60, height >= 20
3. 尺寸或内容变化时重算字号

所有操作返回新字段，不修改入参。

测试要点：
- test_place_clamps_to_page: 放置时贴边收缩
- test_move_clamps: 拖动越界时钳制
- test_resize_minimum: 缩放下限
- test_normalize_idempotent: 单行规整幂等
"""

from __future__ import annotations

import logging
import re
import uuid
from datetime import date

from ..config import FieldRules, load_rules
from ..interfaces import InvalidFontError, NotReadyError, OutOfBoundsError
from ..models import FieldType, FontId, SignField, Viewport
from .font_fit import font_size_for_content
from .transform import ensure_ready

logger = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_content(raw: str) -> str:
    """换行与连续空白合并为单个空格，再去首尾空白"""
    return _WHITESPACE_RUN.sub(" ", raw or "").strip()


def _clamp(value: float, low: float, high: float) -> float:
    # high < low 时取 low
    return max(low, min(value, high))


def _live_viewport(field: SignField, viewport: Viewport) -> Viewport:
    vp = ensure_ready(viewport)
    if vp.page_number != field.page:
        raise NotReadyError(f"视口页码({vp.page_number})与字段页码({field.page})不一致")
    return vp


def rebase_to_viewport(
    field: SignField,
    viewport: Viewport,
    rules: FieldRules | None = None,
) -> SignField:
    """
    把字段换算到新的渲染尺寸下（缩放后首次编辑时使用）

    快照与当前视口渲染尺寸一致时原样返回。
    换算后仍保证最小尺寸与页面包含，并按新框重算字号。
    """
    vp = _live_viewport(field, viewport)
    snap = field.viewport_snapshot
    if (
        snap.rendered_width == vp.rendered_width
        and snap.rendered_height == vp.rendered_height
    ) or not snap.is_ready:
        return field

    rules = rules or load_rules()
    geo = rules.geometry
    kx = vp.rendered_width / snap.rendered_width
    ky = vp.rendered_height / snap.rendered_height

    width = max(geo.min_width, field.width * kx)
    height = max(geo.min_height, field.height * ky)
    x = _clamp(field.x * kx, 0.0, vp.rendered_width - width)
    y = _clamp(field.y * ky, 0.0, vp.rendered_height - height)
    font_size = font_size_for_content(width, height, field.type, field.content, rules)

    logger.debug(
        f"字段 {field.id} 随缩放换算: kx={kx:.3f}, ky={ky:.3f}, "
        f"box=({x:.2f}, {y:.2f}, {width:.2f}x{height:.2f}), font_size={font_size}"
    )
    return field.model_copy(update={
        "x": x,
        "y": y,
        "width": width,
        "height": height,
        "font_size": font_size,
        "viewport_snapshot": vp,
    })


def place(
    field_type: FieldType | str,
    click_x: float,
    click_y: float,
    viewport: Viewport,
    *,
    rules: FieldRules | None = None,
    date_format: str = "%m/%d/%Y",
    today: date | None = None,
) -> SignField:
    """
    在点击位置放置字段

    Args:
        field_type: 字段类型
        click_x/click_y: 相对渲染页面左上角的点击位置(px)
        viewport: 当前页视口（作为快照保存）
        rules: 字段规则
        date_format: 日期字段自动填充格式
        today: 日期字段使用的日期（默认今天）

    Returns:
        新字段

    Raises:
        NotReadyError: 视口未就绪
        OutOfBoundsError: 点击不在页面内
    """
    rules = rules or load_rules()
    vp = ensure_ready(viewport)
    field_type = FieldType(field_type)

    if not vp.contains(click_x, click_y):
        raise OutOfBoundsError(
            f"点击位置({click_x:.2f}, {click_y:.2f})超出页面"
            f"({vp.rendered_width:.2f}x{vp.rendered_height:.2f})"
        )

    geo = rules.geometry
    type_rule = rules.rule_for(field_type)
    pad = geo.place_padding

    # 页面比默认框还小时收缩，但不低于最小尺寸
    width = min(type_rule.default_width, max(geo.min_width, vp.rendered_width - pad))
    height = min(type_rule.default_height, max(geo.min_height, vp.rendered_height - pad))

    x = _clamp(click_x, 0.0, vp.rendered_width - width - pad)
    y = _clamp(click_y, 0.0, vp.rendered_height - height - pad)

    content = ""
    if field_type == FieldType.DATE:
        content = (today or date.today()).strftime(date_format)

    field = SignField(
        id=uuid.uuid4().hex,
        type=field_type,
        page=vp.page_number,
        x=x,
        y=y,
        width=width,
        height=height,
        content=content,
        font_size=font_size_for_content(width, height, field_type, content, rules),
        viewport_snapshot=vp,
    )
    logger.info(
        f"放置字段 {field.type.value} 第{field.page}页: "
        f"click=({click_x:.2f}, {click_y:.2f}) box=({x:.2f}, {y:.2f}, {width:g}x{height:g}) "
        f"font_size={field.font_size:g}"
    )
    return field


def move(
    field: SignField,
    new_x: float,
    new_y: float,
    viewport: Viewport,
    rules: FieldRules | None = None,
) -> SignField:
    """拖动字段到新位置（钳制到页面内，右/下留5px）"""
    rules = rules or load_rules()
    field = rebase_to_viewport(field, viewport, rules)
    vp = viewport
    pad = rules.geometry.move_padding

    x = _clamp(new_x, 0.0, vp.rendered_width - field.width - pad)
    y = _clamp(new_y, 0.0, vp.rendered_height - field.height - pad)
    return field.model_copy(update={"x": x, "y": y, "viewport_snapshot": vp})


def resize(
    field: SignField,
    new_width: float,
    new_height: float,
    viewport: Viewport,
    rules: FieldRules | None = None,
) -> SignField:
    """
    缩放字段

    宽度钳制到 [60, rendered_width - x - 10]，高度钳制到 [20, rendered_height - y - 10]。
    字段太靠右/下导致上限小于下限时，先把字段左/上移到能容下最小尺寸的位置。
    """
    rules = rules or load_rules()
    field = rebase_to_viewport(field, viewport, rules)
    geo = rules.geometry
    pad = geo.resize_padding

    x, y = field.x, field.y
    if viewport.rendered_width - x - pad < geo.min_width:
        x = max(0.0, viewport.rendered_width - pad - geo.min_width)
    if viewport.rendered_height - y - pad < geo.min_height:
        y = max(0.0, viewport.rendered_height - pad - geo.min_height)

    max_width = viewport.rendered_width - x - pad
    max_height = viewport.rendered_height - y - pad
    width = max(geo.min_width, min(new_width, max_width))
    height = max(geo.min_height, min(new_height, max_height))

    font_size = font_size_for_content(width, height, field.type, field.content, rules)
    logger.debug(f"缩放字段 {field.id}: {width:.2f}x{height:.2f}, font_size={font_size}")
    return field.model_copy(update={
        "x": x,
        "y": y,
        "width": width,
        "height": height,
        "font_size": font_size,
        "viewport_snapshot": viewport,
    })


def set_content(
    field: SignField,
    raw_text: str,
    rules: FieldRules | None = None,
) -> SignField:
    """写入单行内容并重算字号"""
    content = normalize_content(raw_text)
    font_size = font_size_for_content(field.width, field.height, field.type, content, rules)
    return field.model_copy(update={"content": content, "font_size": font_size})


def set_font(field: SignField, font: FontId | str | None) -> SignField:
    """设置字体（None表示交给后端使用默认字体）"""
    if font is None:
        return field.model_copy(update={"font": None})
    try:
        font_id = FontId(font)
    except ValueError as e:
        raise InvalidFontError(f"不支持的字体: {font}") from e
    return field.model_copy(update={"font": font_id})
