"""
pytest fixtures - 测试共享资源

Fixtures 用于:
1. 提供测试数据 (配置、记录、响应)
2. 设置/清理测试环境 (激活/停用处理器)
3. 在多个测试间共享 Mock 传输
"""

import json
import sys
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

# 确保可以导入 src 模块
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.core.clients.base import BaseTransport, RemoteResponse  # noqa: E402

TEST_API_KEY = "sk-test-secret-0123456789"


def make_response(status: int = 200, body=None, reason: str = "OK") -> RemoteResponse:
    """构造 RemoteResponse，body 为 dict/list 时序列化为 JSON，str 按 UTF-8 编码"""
    if body is None:
        body = b""
    if not isinstance(body, (str, bytes)):
        body = json.dumps(body, ensure_ascii=False)
    if isinstance(body, str):
        body = body.encode("utf-8")
    return RemoteResponse(status=status, reason=reason, body=body)


def reply_body(content: str) -> dict:
    """构造成功的 Chat Completions 响应体"""
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


# ==================== 配置 Fixtures ====================


@pytest.fixture
def processor_properties() -> dict:
    """提供合法的处理器属性"""
    return {"api_key": TEST_API_KEY, "model": "gpt-3.5-turbo"}


@pytest.fixture
def sample_config(tmp_path) -> dict:
    """提供示例配置字典"""
    return {
        "global": {
            "log": {
                "level": "info",
                "format": "text",
                "output": "console",
            },
        },
        "processor": {
            "api_key": TEST_API_KEY,
            "model": "gpt-3.5-turbo",
        },
        "runner": {
            "type": "directory",
            "input_dir": str(tmp_path / "input"),
            "output_dir": str(tmp_path / "output"),
            "concurrent_tasks": 2,
        },
    }


@pytest.fixture
def sample_config_file(sample_config, tmp_path) -> Path:
    """创建临时配置文件"""
    import yaml

    config_path = tmp_path / "test_config.yaml"
    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(sample_config, f, allow_unicode=True)
    return config_path


@pytest.fixture
def configuration(processor_properties):
    """提供激活配置"""
    from src.config.stage import activate

    return activate(processor_properties)


# ==================== Mock Fixtures ====================


@pytest.fixture
def mock_transport():
    """模拟传输，默认返回 200 + 'hello'"""
    transport = AsyncMock(spec=BaseTransport)
    transport.execute.return_value = make_response(200, reply_body("hello"))
    return transport


@pytest_asyncio.fixture
async def processor(mock_transport, processor_properties):
    """提供已激活的处理器，测试后停用"""
    from src.core.processor import OpenAIProcessor

    proc = OpenAIProcessor(transport=mock_transport)
    await proc.on_scheduled(processor_properties)
    yield proc
    await proc.on_stopped()
