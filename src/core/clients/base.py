"""
远程传输抽象基类

本模块定义远程调用的请求/响应描述对象和传输接口。具体实现
(aiohttp) 见 openai_client.py。

类/函数清单:
    RemoteRequest (请求描述):
        - endpoint: 目标 URL
        - body: 已序列化的 JSON 请求体
        - api_key: SecretStr，不参与 repr
        - headers() -> Dict[str, str]
          构造发送用的请求头 (仅传输层调用)

    RemoteResponse (响应描述):
        - status / reason / body (原始字节，由 ResponseInterpreter 解码)
        - ok: 状态码是否在 2xx 范围

    BaseTransport (ABC 抽象基类):
        - execute(session, request) -> RemoteResponse  [抽象方法]
          执行一次阻塞式 (await 至完成) 调用
          异常: TransportError

设计目的:
    - 传输只负责把请求送出并取回响应，不解释状态码
    - 便于单元测试 (可注入 Mock 实现)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict

import aiohttp
from pydantic import SecretStr


@dataclass(frozen=True)
class RemoteRequest:
    """
    远程请求描述

    Attributes:
        endpoint: 目标 URL
        body: JSON 请求体文本
        api_key: API 密钥 (SecretStr，repr 中不出现)
    """

    endpoint: str
    body: str
    api_key: SecretStr = field(repr=False)

    def headers(self) -> Dict[str, str]:
        """构造请求头，包含明文密钥，只能交给传输层使用"""
        return {
            "Authorization": f"Bearer {self.api_key.get_secret_value()}",
            "Content-Type": "application/json",
        }


@dataclass(frozen=True)
class RemoteResponse:
    """
    远程响应描述

    Attributes:
        status: HTTP 状态码
        reason: HTTP 状态文本 (如 "Internal Server Error")
        body: 响应体原始字节
    """

    status: int
    reason: str = ""
    body: bytes = b""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class BaseTransport(ABC):
    """
    远程传输抽象基类

    接口契约:
        - execute 是异步的，单次调用、不重试、不覆盖默认超时
        - 任何 HTTP 状态码都作为 RemoteResponse 返回
        - 未拿到响应 (网络错误、超时) 时抛出 TransportError
    """

    @abstractmethod
    async def execute(
        self, session: aiohttp.ClientSession, request: RemoteRequest
    ) -> RemoteResponse:
        """
        执行远程调用

        Args:
            session: 共享的 aiohttp Session
            request: 请求描述

        Returns:
            RemoteResponse

        Raises:
            TransportError: 连接失败或超时
        """
        pass
