"""
OpenAI 记录处理器

把记录内容发送给 OpenAI Chat Completions，用生成的回复整体替换记录内容，
并把记录路由到 success 或 failure。

单条记录的状态流转 (严格顺序，不重入):
    RECEIVED → CONTENT_READ → REQUEST_SENT → RESPONSE_INTERPRETED → REWRITTEN → TERMINAL
        │            │              │                  │
        └────────────┴──────────────┴──────────────────┴──→ FAILED → TERMINAL (failure)

生命周期:
    on_scheduled(properties)   校验属性 (失败抛出 ConfigError)，创建共享 aiohttp Session
    on_trigger(session)        处理一条记录，可并发调用
    on_stopped()               关闭共享 Session

错误边界:
    on_trigger 内部的任何异常都不会抛出给调用方: 原始记录 (内容不变)
    被转移到 failure，并附带 openai.error.type / openai.error.message 属性。
    协程被取消时同样先把已取出的记录转移到 failure，再继续抛出 CancelledError。
"""

import asyncio
import logging
from typing import Any, Mapping

import aiohttp

from ..config.properties import SUPPORTED_PROPERTIES, PropertyDescriptor
from ..config.stage import StageConfiguration, activate
from ..data.base import BaseProcessSession
from ..models.errors import ConfigError, FlowStageError, InternalProcessingError
from ..models.record import Outcome, Record
from .clients import BaseTransport, OpenAITransport
from .content import RequestBuilder, ResponseInterpreter, read_text

ATTR_MODEL = "openai.model"
ATTR_ERROR_TYPE = "openai.error.type"
ATTR_ERROR_MESSAGE = "openai.error.message"

_REDACTED = "**********"


class OpenAIProcessor:
    """
    OpenAI 记录处理器

    作为协调者，编排各组件完成单条记录的处理:
    1. RequestBuilder: 读取文本并构建请求
    2. BaseTransport: 执行远程调用
    3. ResponseInterpreter: 解析响应
    4. BaseProcessSession: 改写内容并路由

    on_trigger 只使用局部变量和只读的激活配置，可以被多个协程同时调用。

    Attributes:
        transport: 远程传输
        builder: 请求构建器
        interpreter: 响应解析器
        configuration: 激活配置，未激活时为 None
    """

    TAGS = ("OpenAI", "GPT", "ChatGPT", "AI", "text", "generate")
    CAPABILITY_DESCRIPTION = (
        "Sends record content as input to OpenAI API and returns the generated response."
    )

    def __init__(
        self,
        transport: BaseTransport | None = None,
        builder: RequestBuilder | None = None,
        interpreter: ResponseInterpreter | None = None,
    ):
        self.transport = transport or OpenAITransport()
        self.builder = builder or RequestBuilder()
        self.interpreter = interpreter or ResponseInterpreter()
        self.configuration: StageConfiguration | None = None
        self._http: aiohttp.ClientSession | None = None

    # ==================== 描述 ====================

    def get_relationships(self) -> tuple[Outcome, ...]:
        """处理器的全部路由"""
        return (Outcome.SUCCESS, Outcome.FAILURE)

    def get_supported_property_descriptors(self) -> tuple[PropertyDescriptor, ...]:
        """处理器支持的全部属性"""
        return SUPPORTED_PROPERTIES

    @property
    def is_active(self) -> bool:
        return self.configuration is not None and self._http is not None

    # ==================== 生命周期 ====================

    async def on_scheduled(self, properties: Mapping[str, Any] | None) -> StageConfiguration:
        """
        激活处理器

        每次 (重新) 激活都会重新校验属性。校验失败时处理器处于未激活状态，
        on_trigger 不会处理任何记录。

        Args:
            properties: 属性字典 (config.yaml 的 processor 节)

        Returns:
            激活配置

        Raises:
            ConfigError: 属性缺失或非法
        """
        try:
            configuration = activate(properties)
        except ConfigError:
            self.configuration = None
            raise
        self.configuration = configuration

        if self._http is None or self._http.closed:
            self._http = aiohttp.ClientSession()

        logging.info(f"OpenAIProcessor 已激活 | 模型: {configuration.model}")
        return configuration

    async def on_stopped(self) -> None:
        """停用处理器并关闭共享 Session"""
        if self._http is not None and not self._http.closed:
            await self._http.close()
        self._http = None
        self.configuration = None
        logging.info("OpenAIProcessor 已停用")

    # ==================== 记录处理 ====================

    async def on_trigger(self, session: BaseProcessSession) -> Outcome | None:
        """
        处理一条记录

        Args:
            session: 处理会话

        Returns:
            记录被转移到的路由；没有待处理记录时返回 None

        Raises:
            ConfigError: 处理器尚未激活 (此时不会取出任何记录)
        """
        configuration = self.configuration
        http = self._http
        if configuration is None or http is None:
            raise ConfigError("处理器尚未激活，请先调用 on_scheduled()")

        # RECEIVED
        record = session.get()
        if record is None:
            return None

        try:
            # CONTENT_READ
            text = read_text(session.read(record))

            # REQUEST_SENT
            request = self.builder.build(text, configuration)
            response = await self.transport.execute(http, request)

            # RESPONSE_INTERPRETED
            reply = self.interpreter.interpret(response)

            # REWRITTEN
            updated = session.write(record, reply.encode("utf-8"))
            updated = updated.with_attributes(**{ATTR_MODEL: configuration.model})

            # TERMINAL
            session.transfer(updated, Outcome.SUCCESS)

        except FlowStageError as e:
            return self._route_failure(session, record, e, configuration)
        except asyncio.CancelledError:
            # 已取出的记录不能悬空
            error = InternalProcessingError("处理被取消")
            self._route_failure(session, record, error, configuration)
            raise
        except Exception as e:
            # 不输出 traceback: 异常消息可能带有密钥明文，统一在 _route_failure 中脱敏后记录
            error = InternalProcessingError(f"{type(e).__name__}: {e}")
            return self._route_failure(session, record, error, configuration)

        logging.info(
            f"记录[{record.record_id}] 处理成功 | 输入 {record.size} 字节, "
            f"输出 {updated.size} 字节"
        )
        return Outcome.SUCCESS

    def _route_failure(
        self,
        session: BaseProcessSession,
        record: Record,
        error: FlowStageError,
        configuration: StageConfiguration,
    ) -> Outcome:
        """把原始记录转移到 failure，内容保持不变"""
        message = _redact(error.message, configuration)
        logging.error(f"记录[{record.record_id}] {error.error_type}: {message}")

        failed = record.with_attributes(
            **{ATTR_ERROR_TYPE: str(error.error_type), ATTR_ERROR_MESSAGE: message}
        )
        session.transfer(failed, Outcome.FAILURE)
        return Outcome.FAILURE


def _redact(message: str, configuration: StageConfiguration) -> str:
    """从诊断消息中抹去 API 密钥明文"""
    secret = configuration.api_key.get_secret_value()
    if secret and secret in message:
        return message.replace(secret, _REDACTED)
    return message
