"""
内容处理模块

本模块负责记录内容与远程 API 之间的转换。

类/函数清单:
    read_text(content) -> str
        按行读取记录字节，每行补 \\n
    RequestBuilder:
        - build_body(text, model) -> str
          序列化 JSON 请求体
        - build(text, configuration) -> RemoteRequest
          构建完整请求描述 (端点、请求头、请求体)
    ResponseInterpreter:
        - interpret(response) -> str
          判定状态码、解析 JSON、提取 choices[0].message.content
          异常: RemoteRejection, MalformedResponse

使用示例:
    from src.core.content import RequestBuilder, ResponseInterpreter, read_text

    request = RequestBuilder().build(read_text(record.content), configuration)
    reply = ResponseInterpreter().interpret(response)
"""

from .builder import OPENAI_CHAT_COMPLETIONS_URL, RequestBuilder, read_text
from .interpreter import ResponseInterpreter

__all__ = [
    "OPENAI_CHAT_COMPLETIONS_URL",
    "RequestBuilder",
    "ResponseInterpreter",
    "read_text",
]
