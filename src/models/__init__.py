"""
数据模型与异常定义模块

模块内容:
    数据模型:
        - Record: 管道记录 (身份、字节内容、属性)
        - Outcome: 路由结果枚举 (SUCCESS/FAILURE)

    异常类:
        - FlowStageError: 基础异常类
        - ConfigError: 配置错误 (激活失败)
        - TransportError: 传输错误
        - RemoteRejection: 远程 API 返回非成功状态
        - MalformedResponse: 响应格式错误
        - InternalProcessingError: 内部处理错误

    枚举:
        - ErrorType: 错误类型枚举

使用示例:
    from src.models import Record, Outcome, RemoteRejection

    record = Record(content=b"ping")
    raise RemoteRejection("Internal Server Error", status_code=500)
"""

from .errors import (
    ErrorType,
    FlowStageError,
    ConfigError,
    TransportError,
    RemoteRejection,
    MalformedResponse,
    InternalProcessingError,
)
from .record import Record, Outcome

__all__ = [
    "ErrorType",
    "FlowStageError",
    "ConfigError",
    "TransportError",
    "RemoteRejection",
    "MalformedResponse",
    "InternalProcessingError",
    "Record",
    "Outcome",
]
