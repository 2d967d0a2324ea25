"""
记录与路由结果定义

Record 是流经管道的最小内容单元，Outcome 是处理器的两个终点路由。
Record 不可变: 改写内容会产生一个身份 (record_id) 相同的新实例，
原始实例保持不变，失败路径总是转发原始实例。
"""

import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class Outcome(str, Enum):
    """
    路由结果

    处理器只有两个终点，每条记录恰好被转移到其中一个，且只转移一次。
    """

    SUCCESS = "success"
    FAILURE = "failure"

    @property
    def description(self) -> str:
        """路由描述"""
        if self is Outcome.SUCCESS:
            return "Successful responses from OpenAI."
        return "Failed requests or processing errors."

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Record:
    """
    管道记录

    Attributes:
        content: 记录的原始字节内容
        attributes: 记录属性 (如 filename、openai.model)，只读副本，不参与 hash
        record_id: 记录唯一标识，与内容无关，改写内容时保持不变
    """

    content: bytes = b""
    attributes: Mapping[str, str] = field(default_factory=dict, hash=False)
    record_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        # 每个实例持有自己的只读副本，改写后的记录与原始记录互不影响
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    @property
    def size(self) -> int:
        """内容字节数"""
        return len(self.content)

    def with_content(self, content: bytes) -> "Record":
        """返回整体替换内容后的新记录 (身份不变)"""
        return replace(self, content=content)

    def with_attributes(self, **attributes: str) -> "Record":
        """返回合并属性后的新记录 (身份与内容不变)"""
        merged = dict(self.attributes)
        merged.update(attributes)
        return replace(self, attributes=merged)
