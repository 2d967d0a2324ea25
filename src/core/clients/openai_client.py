"""
OpenAI 传输实现

本模块通过 aiohttp 把 RemoteRequest 发送到 OpenAI Chat Completions 端点。

通信协议:
    - POST https://api.openai.com/v1/chat/completions
    - Authorization: Bearer <api_key>
    - Content-Type: application/json

超时配置:
    不覆盖，使用共享 ClientSession 的默认 aiohttp.ClientTimeout。

错误处理:
    - 任意 HTTP 状态码: 返回 RemoteResponse，由 ResponseInterpreter 判定
    - 连接超时: 抛出 TransportError
    - 网络错误 (aiohttp.ClientError): 抛出 TransportError

使用示例:
    transport = OpenAITransport()
    async with aiohttp.ClientSession() as session:
        response = await transport.execute(session, request)
"""

import asyncio
import logging
import time

import aiohttp

from ...models.errors import TransportError
from .base import BaseTransport, RemoteRequest, RemoteResponse


class OpenAITransport(BaseTransport):
    """
    OpenAI Chat Completions 传输

    无状态: 同一实例可以被多个并发的 on_trigger 共享。
    """

    async def execute(
        self, session: aiohttp.ClientSession, request: RemoteRequest
    ) -> RemoteResponse:
        """
        发送请求并读取完整响应体

        Args:
            session: aiohttp 客户端会话
            request: 请求描述

        Returns:
            RemoteResponse (包含任意状态码)

        Raises:
            TransportError: 超时或网络/客户端错误
        """
        logging.debug(f"向 OpenAI API ({request.endpoint}) 发送请求...")
        start_time = time.time()

        try:
            async with session.post(
                request.endpoint,
                headers=request.headers(),
                data=request.body.encode("utf-8"),
            ) as resp:
                response_body = await resp.read()
                elapsed = time.time() - start_time
                logging.debug(f"OpenAI API 响应状态: {resp.status} in {elapsed:.2f}s")

                return RemoteResponse(
                    status=resp.status,
                    reason=resp.reason or "",
                    body=response_body,
                )

        except asyncio.TimeoutError as e:
            elapsed = time.time() - start_time
            logging.error(f"调用 OpenAI API 超时 ({elapsed:.2f}s)")
            raise TransportError(
                f"OpenAI API call timed out after {elapsed:.2f}s"
            ) from e

        except aiohttp.ClientError as e:
            logging.error(f"调用 OpenAI API 时网络/客户端错误: {type(e).__name__}")
            raise TransportError(f"{type(e).__name__}: {e}") from e
