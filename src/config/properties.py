"""
处理器属性描述符

本模块描述处理器对外暴露的配置属性: 名称、显示名、说明、是否必需、
是否敏感、默认值以及校验器。激活时由 stage.activate() 逐一校验。

属性清单:
    ┌──────────┬────────────────┬──────┬──────┬────────────────┐
    │ 键       │ 显示名          │ 必需 │ 敏感 │ 默认值          │
    ├──────────┼────────────────┼──────┼──────┼────────────────┤
    │ api_key  │ OpenAI API Key │ 是   │ 是   │ -              │
    │ model    │ Model          │ 是   │ 否   │ gpt-3.5-turbo  │
    └──────────┴────────────────┴──────┴──────┴────────────────┘

敏感属性:
    校验结果的说明文字中永远不出现敏感属性的值。
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

DEFAULT_MODEL = "gpt-3.5-turbo"

# 校验器: 输入 (显示名, 值)，返回错误说明，合法时返回 None
Validator = Callable[[str, Any], Optional[str]]


def non_empty_validator(display_name: str, value: Any) -> Optional[str]:
    """值必须是非空白字符串"""
    if not isinstance(value, str):
        return f"{display_name} 必须是字符串"
    if not value.strip():
        return f"{display_name} 不能为空"
    return None


@dataclass(frozen=True)
class ValidationResult:
    """
    单个属性的校验结果

    Attributes:
        subject: 属性显示名
        valid: 是否合法
        explanation: 不合法时的说明 (不含敏感值)
    """

    subject: str
    valid: bool
    explanation: str = ""


@dataclass(frozen=True)
class PropertyDescriptor:
    """
    属性描述符

    Attributes:
        key: 配置键名 (config.yaml 中 processor 节下的键)
        display_name: 显示名称
        description: 属性说明
        required: 是否必需
        sensitive: 是否敏感 (密钥类)
        default_value: 未设置时使用的默认值
        validators: 校验器列表
    """

    key: str
    display_name: str
    description: str = ""
    required: bool = False
    sensitive: bool = False
    default_value: Optional[str] = None
    validators: tuple[Validator, ...] = field(default_factory=tuple)

    def resolve(self, properties: dict[str, Any]) -> Any:
        """读取属性值，未设置 (缺失或 None) 时返回默认值"""
        value = properties.get(self.key)
        if value is None:
            return self.default_value
        return value

    def validate(self, value: Any) -> ValidationResult:
        """
        校验属性值

        Args:
            value: 已解析 (含默认值) 的属性值

        Returns:
            ValidationResult
        """
        if value is None:
            if self.required:
                return ValidationResult(
                    self.display_name, False, f"{self.display_name} 是必需属性"
                )
            return ValidationResult(self.display_name, True)

        for validator in self.validators:
            explanation = validator(self.display_name, value)
            if explanation:
                return ValidationResult(self.display_name, False, explanation)
        return ValidationResult(self.display_name, True)


API_KEY = PropertyDescriptor(
    key="api_key",
    display_name="OpenAI API Key",
    description="Your OpenAI API key.",
    required=True,
    sensitive=True,
    validators=(non_empty_validator,),
)

MODEL = PropertyDescriptor(
    key="model",
    display_name="Model",
    description="The OpenAI model to use, e.g., gpt-3.5-turbo",
    required=True,
    default_value=DEFAULT_MODEL,
    validators=(non_empty_validator,),
)

SUPPORTED_PROPERTIES: tuple[PropertyDescriptor, ...] = (API_KEY, MODEL)
