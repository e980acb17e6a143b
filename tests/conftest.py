"""全局测试配置和 fixtures。

本模块提供所有测试共享的 fixtures 和配置。
"""

import os
import sys

import httpx
import pytest

# 在导入任何模块之前清理环境变量，避免本机配置影响测试
for _key in [k for k in os.environ if k.upper().startswith("OPENAI_")]:
    del os.environ[_key]

# 确保可以导入 src 下的包
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from assistant_messages.config import ClientConfig
from assistant_messages.http_client import APIClient
from assistant_messages.messages import MessagesClient
from tests.fixtures import MessageResponseBuilder, RecordingTransport


@pytest.fixture
def test_settings() -> ClientConfig:
    """测试环境配置。"""
    return ClientConfig(
        base_url="https://test.example.com/v1",
        api_key="sk-test-key",
        assistant_version="v2",
    )


@pytest.fixture
def mock_thread_id() -> str:
    """模拟线程 ID。"""
    return "thread_abc123"


@pytest.fixture
def mock_message_id() -> str:
    """模拟消息 ID。"""
    return "msg_abc123"


@pytest.fixture
def mock_file_id() -> str:
    """模拟文件 ID。"""
    return "file_abc123"


@pytest.fixture
def transport() -> RecordingTransport:
    """记录请求的 httpx 模拟传输层。"""
    return RecordingTransport()


@pytest.fixture
def api_client(test_settings: ClientConfig, transport: RecordingTransport) -> APIClient:
    """注入模拟传输层的 APIClient。"""
    return APIClient(test_settings, http_client=httpx.AsyncClient(transport=transport))


@pytest.fixture
def messages_client(api_client: APIClient) -> MessagesClient:
    """注入模拟传输层的 MessagesClient。"""
    return MessagesClient(api_client)


@pytest.fixture
def sample_message_response(mock_thread_id: str, mock_message_id: str) -> dict:
    """示例消息响应。"""
    return (
        MessageResponseBuilder()
        .with_id(mock_message_id)
        .with_thread_id(mock_thread_id)
        .with_text("你好，请介绍一下自己。")
        .build()
    )


@pytest.fixture(autouse=True)
def reset_lru_cache():
    """自动重置 LRU 缓存。

    确保每个测试都有干净的配置状态。
    """
    from assistant_messages.config import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
