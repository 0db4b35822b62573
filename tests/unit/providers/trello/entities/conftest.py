"""
实体测试共享 Fixtures

实体通过真实的 API 类访问模拟的 TrelloClient，可以同时校验请求路径和本地同步行为。
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from trello_sync.core.config import settings


@pytest.fixture
def mock_client():
    """模拟 TrelloClient"""
    client = MagicMock()
    client.get = AsyncMock()
    client.post = AsyncMock()
    client.put = AsyncMock()
    client.delete = AsyncMock()
    return client


@pytest.fixture(autouse=True)
def long_refresh_throttle(monkeypatch):
    """测试期间数据不会因为时间流逝而过期"""
    monkeypatch.setattr(settings, "TRELLO_REFRESH_THROTTLE", 60.0)
