"""
处理器调度器

模拟管道引擎: 反复调用 on_trigger，直到会话中的记录全部处理完毕。
最多同时保持 concurrent_tasks 个 on_trigger 协程在执行，
远程调用的等待时间由并发协程掩盖。

调度循环:
    ┌──────────────────────────────────────────────────────────────┐
    │ 1. 填充: 活动任务数 < concurrent_tasks 且会话仍有记录          │
    │          → create_task(on_trigger)                           │
    │ 2. 等待: asyncio.wait(FIRST_COMPLETED)                        │
    │ 3. 统计: 按返回的 Outcome 计数                                │
    │ 4. 监控: 每 5 秒输出一次进度                                  │
    └──────────────────────────────────────────────────────────────┘

on_trigger 抛出异常时停止填充，等待其余活动任务转移各自的记录，
再把第一个异常抛给调用方。
"""

import asyncio
import logging
import time
from typing import Dict, Set

from ..data.base import BaseProcessSession
from ..models.record import Outcome
from .processor import OpenAIProcessor


class StageScheduler:
    """
    处理器调度器

    Attributes:
        concurrent_tasks: 最大并发 on_trigger 数
        progress_interval: 进度日志间隔 (秒)
    """

    def __init__(self, concurrent_tasks: int = 1, progress_interval: float = 5.0):
        if concurrent_tasks < 1:
            raise ValueError(f"concurrent_tasks 必须 >= 1, 当前为 {concurrent_tasks}")
        self.concurrent_tasks = concurrent_tasks
        self.progress_interval = progress_interval

    async def run(
        self, processor: OpenAIProcessor, session: BaseProcessSession
    ) -> Dict[Outcome, int]:
        """
        处理会话中的全部记录

        Args:
            processor: 已激活的处理器
            session: 处理会话

        Returns:
            各路由的记录数

        Raises:
            Exception: 某个 on_trigger 抛出的第一个异常 (其余活动任务已完成)
        """
        counts: Dict[Outcome, int] = {outcome: 0 for outcome in Outcome}
        active_tasks: Set[asyncio.Task] = set()
        first_error: BaseException | None = None
        start_time = time.time()
        last_progress_time = start_time

        while True:
            # 1. 填充任务 (出错后不再取新记录，只等待已取出的记录完成)
            while (
                first_error is None
                and len(active_tasks) < self.concurrent_tasks
                and session.has_pending()
            ):
                active_tasks.add(asyncio.create_task(processor.on_trigger(session)))

            if not active_tasks:
                break

            # 2. 等待任一任务完成
            done, active_tasks = await asyncio.wait(
                active_tasks, timeout=1.0, return_when=asyncio.FIRST_COMPLETED
            )

            # 3. 统计
            for task in done:
                try:
                    outcome = task.result()
                except Exception as e:
                    logging.error(
                        f"on_trigger 异常: {type(e).__name__}: {e}，"
                        f"停止调度，等待 {len(active_tasks)} 个活动任务完成"
                    )
                    if first_error is None:
                        first_error = e
                    continue
                if outcome is not None:
                    counts[outcome] += 1

            # 4. 监控
            current_time = time.time()
            if current_time - last_progress_time >= self.progress_interval:
                logging.info(
                    f"进度 | 成功: {counts[Outcome.SUCCESS]} | "
                    f"失败: {counts[Outcome.FAILURE]} | "
                    f"活动: {len(active_tasks)} | 待处理: {session.pending_count()}"
                )
                last_progress_time = current_time

        if first_error is not None:
            raise first_error

        elapsed = time.time() - start_time
        logging.info(
            f"处理完成 | 成功: {counts[Outcome.SUCCESS]}, "
            f"失败: {counts[Outcome.FAILURE]}, 用时 {elapsed:.2f}s"
        )
        return counts
