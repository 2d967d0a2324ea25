"""
远程传输模块

模块结构:
    - RemoteRequest / RemoteResponse: 请求与响应描述
    - BaseTransport: 抽象基类，定义 execute 接口
    - OpenAITransport: 基于 aiohttp 的 OpenAI 实现

类/函数清单:
    BaseTransport (抽象基类):
        - execute(session, request) -> RemoteResponse
          输入: aiohttp.ClientSession, RemoteRequest
          输出: RemoteResponse (任意状态码)
          异常: TransportError

    OpenAITransport (具体实现):
        - execute(session, request) -> RemoteResponse
          POST 到 request.endpoint，不重试，不覆盖超时

设计模式:
    策略模式 (Strategy Pattern)，测试中可替换为 Mock 传输。

使用示例:
    from src.core.clients import OpenAITransport

    transport = OpenAITransport()
    response = await transport.execute(session, request)
"""

from .base import BaseTransport, RemoteRequest, RemoteResponse
from .openai_client import OpenAITransport

__all__ = ["BaseTransport", "RemoteRequest", "RemoteResponse", "OpenAITransport"]
