"""
配置层 - 加载字段规则与运行期配置

职责：
- 加载 documents/field_rules.yaml（字段尺寸与字号规则）
- 加载 documents/runtime_options.yaml（运行期参数）
- 提供类型安全的配置访问接口
"""

from .logging_setup import configure_logging
from .rules_loader import FieldRules, FieldTypeRule, RulesLoader, load_rules
from .runtime_config import RuntimeConfig, get_config, reload_config

__all__ = [
    "RulesLoader",
    "FieldRules",
    "FieldTypeRule",
    "load_rules",
    "RuntimeConfig",
    "get_config",
    "reload_config",
    "configure_logging",
]
