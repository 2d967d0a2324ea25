"""
配置管理模块

导出清单:
    settings.py:
        load_config(config_path) -> dict
            加载 YAML 配置文件并解析为字典
        init_logging(log_config) -> None
            初始化日志系统 (支持 text/json 格式, console/file 输出)
        merge_config(base, override) -> dict
            深度合并两个配置字典 (override 覆盖 base)
        get_nested(config, *keys, default=None) -> Any
            安全获取嵌套字典值
        DEFAULT_CONFIG
            默认配置字典

    properties.py:
        PropertyDescriptor, API_KEY, MODEL, SUPPORTED_PROPERTIES
            处理器属性描述符

    stage.py:
        activate(properties) -> StageConfiguration
            校验属性并生成不可变的激活配置，失败抛出 ConfigError
        StageConfiguration
            激活配置 (api_key 为 SecretStr)

配置层次:
    1. 运行时参数 (命令行参数)
    2. 配置文件 (config.yaml)
    3. 默认配置 (DEFAULT_CONFIG / 属性默认值)
"""

from .settings import (
    load_config,
    init_logging,
    DEFAULT_CONFIG,
    merge_config,
    get_nested,
)
from .properties import PropertyDescriptor, API_KEY, MODEL, SUPPORTED_PROPERTIES
from .stage import StageConfiguration, activate

__all__ = [
    "load_config",
    "init_logging",
    "DEFAULT_CONFIG",
    "merge_config",
    "get_nested",
    "PropertyDescriptor",
    "API_KEY",
    "MODEL",
    "SUPPORTED_PROPERTIES",
    "StageConfiguration",
    "activate",
]
