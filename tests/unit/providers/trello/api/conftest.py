"""
API 测试共享 Fixtures

提供 API 测试中通用的 Mock 对象和辅助函数。
"""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest


def create_mock_response(data: Any) -> MagicMock:
    """
    创建模拟 HTTP 响应对象。

    Args:
        data: 响应 JSON 数据

    Returns:
        配置好的 MagicMock 响应对象
    """
    resp = MagicMock()
    resp.json.return_value = data
    resp.content = b"{}" if data is not None else b""
    resp.raise_for_status = MagicMock()
    return resp


def create_error_response(status_code: int, text: str, method: str = "GET") -> httpx.Response:
    """创建真实的错误响应，raise_for_status 会抛出 HTTPStatusError"""
    return httpx.Response(
        status_code,
        text=text,
        request=httpx.Request(method, "https://api.trello.com/1/mock"),
    )


@pytest.fixture
def mock_client():
    """模拟 TrelloClient"""
    client = MagicMock()
    client.get = AsyncMock()
    client.post = AsyncMock()
    client.put = AsyncMock()
    client.delete = AsyncMock()
    return client
