"""
响应解析器

判定远程响应成功与否并提取生成文本。

判定规则:
    ┌──────────────────────────────────────┬────────────────────────┐
    │ 条件                                  │ 结果                   │
    ├──────────────────────────────────────┼────────────────────────┤
    │ 状态码不在 2xx                         │ RemoteRejection        │
    │ 响应体不是 UTF-8 JSON                  │ MalformedResponse      │
    │ choices[0].message.content 任一段缺失  │ MalformedResponse      │
    │ content 不是字符串                     │ MalformedResponse      │
    │ 以上都满足                             │ 返回 content (可为空)  │
    └──────────────────────────────────────┴────────────────────────┘

路径检查是逐段显式进行的: choices 缺失或为空数组是错误，
不会被当作空字符串。
"""

import json
from typing import Any

from ...models.errors import MalformedResponse, RemoteRejection
from ..clients.base import RemoteResponse


class ResponseInterpreter:
    """响应解析器，无状态"""

    def interpret(self, response: RemoteResponse) -> str:
        """
        解析响应

        Args:
            response: 远程响应

        Returns:
            choices[0].message.content 字符串

        Raises:
            RemoteRejection: 非成功状态码 (消息为状态文本)
            MalformedResponse: 响应体无法解析或结构不符
        """
        if not response.ok:
            raise RemoteRejection(
                response.reason or f"HTTP {response.status}",
                status_code=response.status,
            )

        try:
            data = json.loads(response.body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise MalformedResponse(f"响应体不是合法 JSON: {e}") from e

        return self.extract_content(data)

    def extract_content(self, data: Any) -> str:
        """
        逐段提取 choices[0].message.content

        Raises:
            MalformedResponse: 任一段缺失或类型不符
        """
        if not isinstance(data, dict):
            raise MalformedResponse("响应顶层不是对象")

        choices = data.get("choices")
        if not isinstance(choices, list):
            raise MalformedResponse("响应缺少 choices 数组")
        if not choices:
            raise MalformedResponse("choices 数组为空")

        first = choices[0]
        if not isinstance(first, dict):
            raise MalformedResponse("choices[0] 不是对象")

        message = first.get("message")
        if not isinstance(message, dict):
            raise MalformedResponse("choices[0] 缺少 message 对象")

        if "content" not in message:
            raise MalformedResponse("message 缺少 content 字段")
        content = message["content"]
        if not isinstance(content, str):
            raise MalformedResponse(
                f"message.content 不是字符串: {type(content).__name__}"
            )

        return content
