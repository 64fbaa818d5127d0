"""
页面视口模型 - 渲染像素尺寸与PDF原生点尺寸的配对

同一页、同一次渲染测得的两组尺寸。缩放后旧视口失效，
由它推导出的所有坐标换算也随之失效。
"""

from __future__ import annotations

import math

from pydantic import BaseModel, Field


class Viewport(BaseModel):
    """单页视口（临时值，每次渲染/缩放重新测量）"""

    page_number: int = Field(..., ge=1, description="页码(从1开始)")
    rendered_width: float = Field(..., description="当前缩放下的渲染宽度(px)")
    rendered_height: float = Field(..., description="当前缩放下的渲染高度(px)")
    native_width: float = Field(..., description="PDF页面宽度(pt)")
    native_height: float = Field(..., description="PDF页面高度(pt)")

    model_config = {"frozen": True}

    @property
    def is_ready(self) -> bool:
        """四个尺寸均为有限正数时才可用于换算"""
        dims = (
            self.rendered_width,
            self.rendered_height,
            self.native_width,
            self.native_height,
        )
        return all(math.isfinite(d) and d > 0 for d in dims)

    @property
    def zoom(self) -> float:
        """渲染宽度相对原生宽度的缩放比"""
        if not self.native_width:
            return 0.0
        return self.rendered_width / self.native_width

    def contains(self, px: float, py: float) -> bool:
        """点是否落在渲染页面范围内（含边界）"""
        return 0 <= px <= self.rendered_width and 0 <= py <= self.rendered_height
