"""
字段规则加载器 - 读取 documents/field_rules.yaml

职责：
- 解析YAML并提供类型安全访问
- 提供各字段类型的默认尺寸、字号比例与上下限
- 提供放置/拖动/缩放的边距与最小尺寸
- 缓存加载结果（避免重复解析）

使用方式：
    rules = RulesLoader.load("documents/field_rules.yaml")
    sig_rule = rules.rule_for(FieldType.SIGNATURE)
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from ..models import FieldType

DEFAULT_RULES_PATH = Path("documents/field_rules.yaml")


class FieldTypeRule(BaseModel):
    """单个字段类型的尺寸与字号规则"""
    default_width: float
    default_height: float
    height_ratio: float = Field(..., description="字号占框高的比例")
    min_font: float
    max_font: float


def _default_type_rules() -> dict[str, FieldTypeRule]:
    return {
        FieldType.SIGNATURE.value: FieldTypeRule(
            default_width=180, default_height=50, height_ratio=0.70, min_font=12, max_font=36,
        ),
        FieldType.INITIALS.value: FieldTypeRule(
            default_width=80, default_height=35, height_ratio=0.65, min_font=10, max_font=28,
        ),
        FieldType.NAME.value: FieldTypeRule(
            default_width=150, default_height=30, height_ratio=0.60, min_font=8, max_font=24,
        ),
        "default": FieldTypeRule(
            default_width=120, default_height=30, height_ratio=0.55, min_font=8, max_font=20,
        ),
    }


class GeometryRules(BaseModel):
    """几何约束"""
    place_padding: float = 10.0
    move_padding: float = 5.0
    resize_padding: float = 10.0
    min_width: float = 60.0
    min_height: float = 20.0


class FontFitRules(BaseModel):
    """字号估算参数"""
    glyph_width_ratio: float = 0.6      # 平均字宽/字号
    horizontal_padding: float = 16.0    # 左右合计内边距(px)
    min_fit_font: float = 8.0
    placeholder_length: int = 10        # 空内容时的名义长度


class FieldRules(BaseModel):
    """字段规则（field_rules.yaml 的结构化表示）"""
    schema_version: str = "1.0"

    geometry: GeometryRules = Field(default_factory=GeometryRules)
    font_fit: FontFitRules = Field(default_factory=FontFitRules)

    # 类型规则，键为字段类型值；"default" 兜底其余类型
    types: dict[str, FieldTypeRule] = Field(default_factory=_default_type_rules)

    def rule_for(self, field_type: FieldType | str) -> FieldTypeRule:
        """获取字段类型规则（未配置的类型使用default）"""
        key = FieldType(field_type).value
        if key in self.types:
            return self.types[key]
        if "default" in self.types:
            return self.types["default"]
        return _default_type_rules()["default"]


class RulesLoader:
    """规则加载器（缓存）"""

    @classmethod
    @lru_cache(maxsize=4)
    def load(cls, rules_path: str | Path = DEFAULT_RULES_PATH) -> FieldRules:
        """加载并缓存规则"""
        path = Path(rules_path)
        if not path.exists():
            raise FileNotFoundError(f"规则文件不存在: {path}")

        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        # 未写出的类型沿用内置默认值
        types = _default_type_rules()
        for key, raw in (data.pop("types", None) or {}).items():
            types[str(key)] = FieldTypeRule(**raw)

        return FieldRules(types=types, **data)

    @classmethod
    def reload(cls, rules_path: str | Path = DEFAULT_RULES_PATH) -> FieldRules:
        """强制重新加载（清除缓存）"""
        cls.load.cache_clear()
        return cls.load(rules_path)


# 便捷函数
def load_rules(rules_path: str | Path | None = None) -> FieldRules:
    """加载字段规则；文件不存在时使用内置默认值"""
    try:
        return RulesLoader.load(rules_path or DEFAULT_RULES_PATH)
    except FileNotFoundError:
        return FieldRules()
