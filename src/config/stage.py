"""
处理器激活配置

activate() 在处理任何记录之前调用，校验全部属性描述符并生成
不可变的 StageConfiguration。任一属性不合法时抛出 ConfigError，
处理器不会被激活。

API 密钥以 pydantic.SecretStr 保存: repr/str/model_dump_json 输出都是
'**********'，只有构造请求头时才通过 get_secret_value() 取出明文。

使用示例:
    configuration = activate({"api_key": "sk-xxx"})
    configuration.model          # "gpt-3.5-turbo"
    configuration.api_key        # SecretStr('**********')
"""

import logging
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, SecretStr, ValidationError, field_validator

from ..models.errors import ConfigError
from .properties import DEFAULT_MODEL, SUPPORTED_PROPERTIES


class StageConfiguration(BaseModel):
    """
    激活后的处理器配置

    Attributes:
        api_key: OpenAI API 密钥 (敏感)
        model: 模型名称
    """

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    api_key: SecretStr
    model: str = DEFAULT_MODEL

    @field_validator("api_key")
    @classmethod
    def api_key_non_empty(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value().strip():
            raise ValueError("api_key_empty")
        return v

    @field_validator("model")
    @classmethod
    def model_non_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("model_empty")
        return v


def activate(properties: Mapping[str, Any] | None) -> StageConfiguration:
    """
    校验属性并生成激活配置

    Args:
        properties: 属性字典 (通常是 config.yaml 的 processor 节)

    Returns:
        StageConfiguration 实例

    Raises:
        ConfigError: 任一属性缺失、为空或类型错误，说明中列出全部不合法属性
    """
    properties = dict(properties or {})

    resolved: dict[str, Any] = {}
    problems: list[str] = []
    for descriptor in SUPPORTED_PROPERTIES:
        value = descriptor.resolve(properties)
        result = descriptor.validate(value)
        if not result.valid:
            problems.append(result.explanation)
            continue
        resolved[descriptor.key] = value

    if problems:
        raise ConfigError(
            "处理器属性校验失败: " + "; ".join(problems),
            details={"invalid_properties": len(problems)},
        )

    try:
        configuration = StageConfiguration(**resolved)
    except ValidationError as e:
        # 只报告字段与错误类型，避免把输入值带进错误消息
        fields = ", ".join(str(err["loc"][0]) for err in e.errors())
        raise ConfigError(f"处理器配置无效: {fields}") from None

    logging.info(f"处理器配置校验通过 | 模型: {configuration.model}")
    return configuration
