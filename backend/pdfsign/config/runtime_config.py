"""
运行期配置 - 读取 documents/runtime_options.yaml

职责：
- 加载渲染后端地址/超时、缩放范围、日期格式等运行参数
- 提供环境变量覆盖机制（前缀 PDFSIGN_，优先于YAML中的值）
- 类型安全的配置访问
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

DEFAULT_RUNTIME_PATH = Path("documents/runtime_options.yaml")


class BackendConfig(BaseModel):
    """渲染后端配置"""

    base_url: str = "http://localhost:54321"
    endpoint: str = "/functions/v1/generate-absolute-precision-pdf"
    timeout_sec: float = 30.0
    access_token: str = ""


class EditorConfig(BaseModel):
    """编辑器配置"""

    zoom_min: float = 0.5
    zoom_max: float = 2.0
    zoom_step: float = 0.1
    default_zoom: float = 1.0
    date_format: str = "%m/%d/%Y"


class RendererConfig(BaseModel):
    """本地渲染器配置（与后端契约一致的安全边距）"""

    output_dir: str = "storage/signed"
    margin_left: float = 10.0
    margin_right: float = 50.0
    margin_bottom: float = 15.0
    margin_top: float = 15.0
    overflow_margin: float = 10.0
    default_font_size: float = 16.0


class LoggingConfig(BaseModel):
    """日志配置"""

    log_level: str = "INFO"
    log_to_file: bool = False
    log_dir: str = "storage/logs"


class RuntimeConfig(BaseSettings):
    """运行期配置（支持环境变量覆盖）"""

    # 基础路径
    base_dir: Path = Path(".")
    rules_path: Path = Path("documents/field_rules.yaml")

    # 各子配置
    backend: BackendConfig = Field(default_factory=BackendConfig)
    editor: EditorConfig = Field(default_factory=EditorConfig)
    renderer: RendererConfig = Field(default_factory=RendererConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "PDFSIGN_",
        "env_nested_delimiter": "__",
        "arbitrary_types_allowed": True,
    }

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # 环境变量 > YAML(初始化参数)，子配置按字段合并
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> RuntimeConfig:
        """从YAML文件加载配置"""
        path = Path(yaml_path)
        if not path.exists():
            return cls()

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        runtime_opts = data.get("runtime_options", {})

        # 规则文件默认与运行期配置放在同一目录
        paths = cls._extract(runtime_opts, "paths")
        paths.setdefault("rules_path", "field_rules.yaml")

        # 以 dict 传入，环境变量只覆盖其中写出的字段
        config = cls(
            backend=cls._extract(runtime_opts, "backend"),
            editor=cls._extract(runtime_opts, "editor"),
            renderer=cls._extract(runtime_opts, "renderer"),
            logging=cls._extract(runtime_opts, "logging"),
            **paths,
        )

        config._resolve_paths(base_dir=path.parent)
        return config

    @staticmethod
    def _extract(data: dict[str, Any], key: str) -> dict[str, Any]:
        """提取并展平配置"""
        section = data.get(key, {}) or {}
        result = {}
        for k, v in section.items():
            if isinstance(v, dict) and "default" in v:
                result[k] = v["default"]
            elif not isinstance(v, dict):
                result[k] = v
        return result

    def _resolve_paths(self, base_dir: Path) -> None:
        """解析相对路径配置为绝对路径（基于配置文件所在目录）"""
        self.base_dir = base_dir.resolve()
        if not self.rules_path.is_absolute():
            self.rules_path = (base_dir / self.rules_path).resolve()
        output_dir = Path(self.renderer.output_dir)
        if not output_dir.is_absolute():
            self.renderer.output_dir = str((base_dir / output_dir).resolve())
        log_dir = Path(self.logging.log_dir)
        if not log_dir.is_absolute():
            self.logging.log_dir = str((base_dir / log_dir).resolve())

    def clamp_zoom(self, zoom: float) -> float:
        """把缩放比限制在编辑器允许的范围内"""
        return min(max(zoom, self.editor.zoom_min), self.editor.zoom_max)


# 全局配置实例
_config: RuntimeConfig | None = None


def get_config() -> RuntimeConfig:
    """获取全局配置（惰性加载）"""
    global _config
    if _config is None:
        _config = RuntimeConfig.from_yaml(DEFAULT_RUNTIME_PATH)
    return _config


def reload_config(yaml_path: str | Path | None = None) -> RuntimeConfig:
    """重新加载配置"""
    global _config
    path = yaml_path or DEFAULT_RUNTIME_PATH
    _config = RuntimeConfig.from_yaml(path)
    return _config
