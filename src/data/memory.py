"""
内存处理会话

基于内存队列的 BaseProcessSession 实现，线程安全。

路由规则:
    - 只接受 Outcome.SUCCESS / Outcome.FAILURE
    - 只接受由本会话 get() 取出的记录
    - 每条记录 (按 record_id) 只能转移一次

使用示例:
    session = InMemoryProcessSession([Record(content=b"ping")])
    await processor.on_trigger(session)
    session.transferred[Outcome.FAILURE]   # [Record(...)]
"""

import logging
import threading
from collections import deque
from typing import Iterable

from ..models.record import Outcome, Record
from .base import BaseProcessSession


class InMemoryProcessSession(BaseProcessSession):
    """
    内存处理会话

    Attributes:
        transferred: 各路由收到的记录列表 {Outcome: [Record, ...]}
    """

    def __init__(self, records: Iterable[Record] = ()):
        """
        初始化会话

        Args:
            records: 初始待处理记录
        """
        self._queue: deque[Record] = deque(records)
        self._in_flight: set[str] = set()
        self._routed: dict[str, Outcome] = {}
        self.transferred: dict[Outcome, list[Record]] = {
            outcome: [] for outcome in Outcome
        }
        self.lock = threading.Lock()

    def enqueue(self, record: Record) -> None:
        """追加一条待处理记录"""
        with self.lock:
            self._queue.append(record)

    def get(self) -> Record | None:
        with self.lock:
            if not self._queue:
                return None
            record = self._queue.popleft()
            self._in_flight.add(record.record_id)
            return record

    def read(self, record: Record) -> bytes:
        self._check_owned(record)
        return record.content

    def write(self, record: Record, content: bytes) -> Record:
        self._check_owned(record)
        return record.with_content(bytes(content))

    def transfer(self, record: Record, outcome: Outcome) -> None:
        if not isinstance(outcome, Outcome):
            raise ValueError(f"未知路由: {outcome!r}")

        with self.lock:
            if record.record_id in self._routed:
                raise ValueError(
                    f"记录 {record.record_id} 已转移到 {self._routed[record.record_id]}"
                )
            if record.record_id not in self._in_flight:
                raise ValueError(f"记录 {record.record_id} 不属于当前会话")
            self._in_flight.discard(record.record_id)
            self._routed[record.record_id] = outcome
            self.transferred[outcome].append(record)

        logging.debug(f"记录 {record.record_id} 已转移到 {outcome}")

    def pending_count(self) -> int:
        with self.lock:
            return len(self._queue)

    def in_flight_count(self) -> int:
        """已取出但尚未转移的记录数"""
        with self.lock:
            return len(self._in_flight)

    def count(self, outcome: Outcome) -> int:
        """某路由已收到的记录数"""
        with self.lock:
            return len(self.transferred[outcome])

    def _check_owned(self, record: Record) -> None:
        with self.lock:
            if record.record_id not in self._in_flight:
                raise ValueError(f"记录 {record.record_id} 不属于当前会话")
