"""
请求构建器

把记录内容转换为发往 OpenAI 的请求描述。

处理流程:
    记录字节 → UTF-8 解码 → 按行读取 (每行补 \\n) → 文本
    文本 + 激活配置 → JSON 请求体 → RemoteRequest

请求体格式:
    {
        "model": "gpt-3.5-turbo",
        "messages": [
            {"role": "user", "content": "<记录文本>"}
        ]
    }
"""

import io
import json

from ...config.stage import StageConfiguration
from ..clients.base import RemoteRequest

OPENAI_CHAT_COMPLETIONS_URL = "https://api.openai.com/v1/chat/completions"


def read_text(content: bytes) -> str:
    """
    读取记录文本

    逐行读取 (\\n、\\r\\n、\\r 都视为行结束)，每一行后面追加 \\n，
    包括最后一行。空内容返回空字符串。无法解码的字节替换为 U+FFFD。

    Args:
        content: 记录字节内容

    Returns:
        文本

    Example:
        >>> read_text(b"a\\r\\nb")
        'a\\nb\\n'
    """
    parts = []
    with io.TextIOWrapper(
        io.BytesIO(content), encoding="utf-8", errors="replace", newline=None
    ) as reader:
        for line in reader:
            parts.append(line if line.endswith("\n") else line + "\n")
    return "".join(parts)


class RequestBuilder:
    """
    请求构建器

    无状态，可被并发调用共享。

    Attributes:
        endpoint: 目标 URL，默认为 OpenAI Chat Completions 端点
    """

    def __init__(self, endpoint: str = OPENAI_CHAT_COMPLETIONS_URL):
        self.endpoint = endpoint

    def build_body(self, text: str, model: str) -> str:
        """
        序列化请求体

        Args:
            text: 记录文本，原样作为唯一一条 user 消息
            model: 模型名称

        Returns:
            JSON 文本 (ensure_ascii=False，只做标准 JSON 字符串转义)
        """
        payload = {
            "model": model,
            "messages": [{"role": "user", "content": text}],
        }
        return json.dumps(payload, ensure_ascii=False)

    def build(self, text: str, configuration: StageConfiguration) -> RemoteRequest:
        """
        构建请求描述

        Args:
            text: 记录文本
            configuration: 激活配置

        Returns:
            RemoteRequest
        """
        return RemoteRequest(
            endpoint=self.endpoint,
            body=self.build_body(text, configuration.model),
            api_key=configuration.api_key,
        )
