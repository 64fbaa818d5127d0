"""
坐标换算 - 渲染像素空间 <-> PDF点空间

换算策略：
1. scale_x = native_width / rendered_width, scale_y = native_height / rendered_height
2. X = px * scale_x
3. Y = native_height - py * scale_y （渲染空间原点左上Y向下，PDF原点左下Y向上）

全程保留浮点精度，只在日志输出时取整。
尺寸为零/无效时抛 TransformDegenerateError，绝不向下游传出 NaN/Infinity。
"""

from __future__ import annotations

import logging
import math

from ..interfaces import TransformDegenerateError
from ..models import Viewport

logger = logging.getLogger(__name__)


def ensure_ready(viewport: Viewport | None) -> Viewport:
    """校验视口可用于换算"""
    if viewport is None:
        raise TransformDegenerateError("页面尚未渲染，无可用视口")
    if not viewport.is_ready:
        raise TransformDegenerateError(
            f"第{viewport.page_number}页尺寸无效: "
            f"rendered={viewport.rendered_width}x{viewport.rendered_height}, "
            f"native={viewport.native_width}x{viewport.native_height}"
        )
    return viewport


def scale_factors(viewport: Viewport) -> tuple[float, float]:
    """渲染像素 -> PDF点 的缩放因子 (scale_x, scale_y)"""
    vp = ensure_ready(viewport)
    return (
        vp.native_width / vp.rendered_width,
        vp.native_height / vp.rendered_height,
    )


def to_pdf_point(px: float, py: float, viewport: Viewport) -> tuple[float, float]:
    """
    渲染像素坐标转PDF点坐标

    Args:
        px: 相对渲染页面左上角的X(px)
        py: 相对渲染页面左上角的Y(px)
        viewport: 同一页同一次渲染的视口

    Returns:
        (X, Y) PDF点空间坐标，原点在页面左下角
    """
    scale_x, scale_y = scale_factors(viewport)
    x = px * scale_x
    y = viewport.native_height - (py * scale_y)
    _check_finite(x, y)

    logger.debug(
        f"像素->PDF 第{viewport.page_number}页: ({px:.2f}, {py:.2f}) -> ({x:.2f}, {y:.2f}) "
        f"scale=({scale_x:.3f}, {scale_y:.3f})"
    )
    return x, y


def to_rendered_point(x: float, y: float, viewport: Viewport) -> tuple[float, float]:
    """PDF点坐标转渲染像素坐标（to_pdf_point 的逆运算）"""
    scale_x, scale_y = scale_factors(viewport)
    px = x / scale_x
    py = (viewport.native_height - y) / scale_y
    _check_finite(px, py)
    return px, py


def to_pdf_size(width: float, height: float, viewport: Viewport) -> tuple[float, float]:
    """渲染像素尺寸转PDF点尺寸（不翻转）"""
    scale_x, scale_y = scale_factors(viewport)
    return width * scale_x, height * scale_y


def _check_finite(a: float, b: float) -> None:
    if not (math.isfinite(a) and math.isfinite(b)):
        raise TransformDegenerateError(f"换算结果无效: ({a}, {b})")
