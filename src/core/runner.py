"""
处理流程入口

从配置文件组装并运行完整流程:
    加载配置 → 初始化日志 → 激活处理器 → 创建会话 → 调度 → 提交 → 停用
"""

import asyncio
import logging
from pathlib import Path
from typing import Dict

from ..config.settings import DEFAULT_CONFIG, get_nested, init_logging, load_config, merge_config
from ..config.stage import StageConfiguration, activate
from ..data import DirectoryProcessSession, create_session
from ..models.record import Outcome
from .processor import OpenAIProcessor
from .scheduler import StageScheduler


class FlowStageRunner:
    """
    处理流程运行器

    Attributes:
        config: 合并默认值后的完整配置
        concurrent_tasks: 并发处理的记录数
    """

    def __init__(self, config_path: str | Path):
        """
        加载配置并初始化日志

        Args:
            config_path: 配置文件路径

        Raises:
            ConfigError: 配置文件不存在或格式错误
        """
        self.config = merge_config(DEFAULT_CONFIG, load_config(config_path))
        init_logging(get_nested(self.config, "global", "log"))

        self.concurrent_tasks = int(get_nested(self.config, "runner", "concurrent_tasks", default=1))

    def validate(self) -> StageConfiguration:
        """
        只校验处理器属性，不处理任何记录

        Raises:
            ConfigError: 属性缺失或非法
        """
        return activate(self.config.get("processor"))

    async def run_async(self) -> Dict[Outcome, int]:
        """激活处理器，处理全部记录并写出结果"""
        processor = OpenAIProcessor()
        await processor.on_scheduled(self.config.get("processor"))
        try:
            session = create_session(self.config)
            try:
                return await StageScheduler(self.concurrent_tasks).run(processor, session)
            finally:
                # 调度中断时也写出已转移的记录
                if isinstance(session, DirectoryProcessSession):
                    session.commit()
        finally:
            await processor.on_stopped()

    def run(self) -> Dict[Outcome, int]:
        """运行处理流程 (同步入口)"""
        logging.info("启动 AI-FlowStage 处理流程...")
        counts = asyncio.run(self.run_async())
        logging.info("AI-FlowStage 处理流程已结束")
        return counts
