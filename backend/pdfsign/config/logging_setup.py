"""
日志初始化 - 按 LoggingConfig 配置根日志器

各模块自行 logging.getLogger(__name__)，这里只负责级别与输出目标。
"""

from __future__ import annotations

import logging
from pathlib import Path

from .runtime_config import LoggingConfig

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(config: LoggingConfig) -> None:
    """配置根日志器"""
    level = logging.getLevelName(config.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.log_to_file:
        log_dir = Path(config.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_dir / "pdfsign.log", encoding="utf-8"))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
