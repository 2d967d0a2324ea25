"""
错误类型与异常定义

本模块定义 AI-FlowStage 的错误分类系统和自定义异常类。
除 ConfigError 外，所有异常都在处理器边界内被捕获，并把记录路由到 failure。

错误分类设计:
    ┌────────────────────┬─────────────────────────────────────────────┐
    │ 错误类型            │ 说明                                        │
    ├────────────────────┼─────────────────────────────────────────────┤
    │ TRANSPORT          │ 网络/连接/超时错误，未拿到 HTTP 响应         │
    │ REMOTE_REJECTION   │ 远程 API 返回非 2xx 状态码                   │
    │ MALFORMED_RESPONSE │ 响应体不是 JSON，或缺少 choices[0] 内容路径  │
    │ INTERNAL           │ 读取/构建/写回过程中的其他异常               │
    └────────────────────┴─────────────────────────────────────────────┘

异常层次结构:
    Exception
    └── FlowStageError (基础异常)
        ├── ConfigError (配置错误，激活失败，向调用方抛出)
        ├── TransportError (传输错误)
        ├── RemoteRejection (远程拒绝)
        ├── MalformedResponse (响应格式错误)
        └── InternalProcessingError (内部处理错误)

使用示例:
    from src.models.errors import ErrorType, RemoteRejection

    raise RemoteRejection("Unauthorized", status_code=401)

    try:
        ...
    except FlowStageError as e:
        print(f"错误: {e.error_type} {e.message}")
"""

from enum import Enum
from typing import Any


class ErrorType(str, Enum):
    """
    错误类型枚举

    继承自 str，枚举值可以直接写入日志和记录属性。

    Attributes:
        CONFIGURATION: 配置缺失或非法 (激活阶段)
        TRANSPORT: 无法连接远程 API
        REMOTE_REJECTION: 远程 API 返回非成功状态码
        MALFORMED_RESPONSE: 响应体无法解析或结构不符合预期
        INTERNAL: 其他意外异常
    """

    CONFIGURATION = "configuration_error"
    TRANSPORT = "transport_error"
    REMOTE_REJECTION = "remote_rejection"
    MALFORMED_RESPONSE = "malformed_response"
    INTERNAL = "internal_processing_error"

    def __str__(self) -> str:
        return self.value


class FlowStageError(Exception):
    """
    AI-FlowStage 基础异常类

    Attributes:
        message: 错误消息文本
        details: 附加的错误详情字典 (可选)，不得包含 API 密钥
    """

    error_type: ErrorType = ErrorType.INTERNAL

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | 详情: {self.details}"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


class ConfigError(FlowStageError):
    """
    配置错误

    激活阶段发现必需属性缺失或为空时抛出。会阻止处理器激活，
    不会按记录处理。

    常见场景:
        - 配置文件不存在或 YAML 语法错误
        - api_key / model 缺失或为空
        - 处理器未激活就开始处理记录
    """

    error_type = ErrorType.CONFIGURATION


class TransportError(FlowStageError):
    """
    传输错误

    无法到达远程 API (DNS、连接拒绝、TLS、超时等)。
    """

    error_type = ErrorType.TRANSPORT


class RemoteRejection(FlowStageError):
    """
    远程拒绝

    远程 API 返回 2xx 以外的 HTTP 状态码，无论响应体内容如何。

    Attributes:
        status_code: HTTP 状态码
    """

    error_type = ErrorType.REMOTE_REJECTION

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.status_code = status_code
        super().__init__(message, details)


class MalformedResponse(FlowStageError):
    """
    响应格式错误

    常见场景:
        - 响应体不是合法 JSON
        - 缺少 choices / choices 为空数组
        - message.content 缺失或不是字符串
    """

    error_type = ErrorType.MALFORMED_RESPONSE


class InternalProcessingError(FlowStageError):
    """内部处理错误，包装读取/构建/写回过程中的意外异常"""

    error_type = ErrorType.INTERNAL
