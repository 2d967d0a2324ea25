"""
处理会话工厂

根据配置文件 runner 节创建处理会话实例。

支持的会话类型:
    - directory: DirectoryProcessSession (默认)
    - memory: InMemoryProcessSession (空队列，由调用方 enqueue)

配置示例:
    runner:
      type: directory
      input_dir: ./input
      output_dir: ./output
"""

import logging
from typing import Any

from ..models.errors import ConfigError
from .base import BaseProcessSession
from .directory import DirectoryProcessSession
from .memory import InMemoryProcessSession


def _normalize_nonempty_str(value: Any) -> str | None:
    """去除首尾空白，空字符串或非字符串返回 None"""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def create_session(config: dict[str, Any]) -> BaseProcessSession:
    """
    创建处理会话

    Args:
        config: 完整配置字典

    Returns:
        处理会话实例

    Raises:
        ConfigError: 会话类型不支持或缺少必要配置
    """
    runner_cfg = config.get("runner", {}) or {}
    session_type = (_normalize_nonempty_str(runner_cfg.get("type")) or "directory").lower()

    logging.info(f"创建处理会话: {session_type}")

    if session_type == "directory":
        input_dir = _normalize_nonempty_str(runner_cfg.get("input_dir"))
        output_dir = _normalize_nonempty_str(runner_cfg.get("output_dir"))
        if not input_dir or not output_dir:
            raise ConfigError("runner 配置缺少 input_dir 或 output_dir")
        return DirectoryProcessSession(input_dir, output_dir)

    if session_type == "memory":
        return InMemoryProcessSession()

    raise ConfigError(f"不支持的会话类型: {session_type}")
