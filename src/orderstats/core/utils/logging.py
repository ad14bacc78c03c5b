"""
Lightweight logging helpers with per-variable context.
"""
# 说明：轻量级日志工具，提供统一的 logger 获取入口，并为每条记录补齐“变量（列名）”上下文。
# 职责：
# - VariableContextFilter：确保每条日志记录都带有 variable 字段，缺省为 "-"
# - configure_logging(...)：初始化 logging 基本配置并为根 handler 挂载上下文过滤器
# - get_logger(...)：按名称获取 logger，必要时自动完成日志系统初始化
# 约定：
# - 各阶段（learn/derive/test/assess）通过 extra={"variable": 列名} 传入列上下文
# - 日志级别优先级：显式参数 level > 环境变量 ORDERSTATS_LOG_LEVEL > 运行时配置的 log_level

from __future__ import annotations

import logging
import os
from typing import Optional

from .config import get_config

LOG_FORMAT = "[%(levelname)s] %(name)s %(asctime)s | %(variable)s | %(message)s"


class VariableContextFilter(logging.Filter):
    """Filter that guarantees a ``variable`` attribute on every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        # 未携带列上下文的记录（如第三方或配置阶段日志）统一补 "-"，保证格式串可用
        if not hasattr(record, "variable"):
            record.variable = "-"
        return True


def configure_logging(level: Optional[str] = None) -> None:
    # 初始化根 logger：确定最终日志级别、设置格式，并为根 handler 挂载 VariableContextFilter
    log_level = level or os.environ.get("ORDERSTATS_LOG_LEVEL", get_config().log_level)
    logging.basicConfig(level=log_level, format=LOG_FORMAT)
    # 过滤器挂在 handler 上：子 logger 传播上来的记录不会经过根 logger 自身的过滤器
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, VariableContextFilter) for f in handler.filters):
            handler.addFilter(VariableContextFilter())


def get_logger(name: str) -> logging.Logger:
    # 获取指定名称的 logger，若尚无 handler，则懒加载方式调用 configure_logging 进行初始化
    logger = logging.getLogger(name)
    if not logger.handlers:
        configure_logging()
    return logger
