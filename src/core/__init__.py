"""核心处理逻辑模块"""

from .processor import OpenAIProcessor
from .scheduler import StageScheduler
from .runner import FlowStageRunner

__all__ = [
    "OpenAIProcessor",
    "StageScheduler",
    "FlowStageRunner",
]
