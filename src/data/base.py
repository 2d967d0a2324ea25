"""
处理会话抽象基类

处理会话是处理器与外部管道之间的接口: 处理器从会话取出记录、
读取内容、写回内容并把记录转移到某个路由。所有实现必须继承此基类。
"""

from abc import ABC, abstractmethod

from ..models.record import Outcome, Record


class BaseProcessSession(ABC):
    """
    处理会话抽象基类

    定义了会话操作的标准接口:
    - get: 取出一条待处理记录
    - read: 读取记录内容 (无消费副作用，可重复读取)
    - write: 整体替换记录内容
    - transfer: 把记录转移到路由 (每条记录恰好一次)
    """

    # ==================== 抽象方法 ====================

    @abstractmethod
    def get(self) -> Record | None:
        """
        取出一条待处理记录

        Returns:
            记录，队列为空时返回 None
        """
        pass

    @abstractmethod
    def read(self, record: Record) -> bytes:
        """
        读取记录的完整内容

        Args:
            record: 由 get() 取出的记录

        Returns:
            字节内容
        """
        pass

    @abstractmethod
    def write(self, record: Record, content: bytes) -> Record:
        """
        整体替换记录内容 (覆盖，不追加)

        Args:
            record: 由 get() 取出的记录
            content: 新内容

        Returns:
            内容已替换的新记录 (身份不变)
        """
        pass

    @abstractmethod
    def transfer(self, record: Record, outcome: Outcome) -> None:
        """
        把记录转移到路由

        Args:
            record: 记录 (原始或改写后的版本)
            outcome: 路由结果

        Raises:
            ValueError: 未知路由、记录不属于本会话或重复转移
        """
        pass

    @abstractmethod
    def pending_count(self) -> int:
        """获取尚未取出的记录数"""
        pass

    # ==================== 具体实现 ====================

    def has_pending(self) -> bool:
        """是否还有待处理的记录"""
        return self.pending_count() > 0
