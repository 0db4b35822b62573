"""
BaseAPI - 原子接口公共部分

负责调用 TrelloClient、把 HTTP 错误转换为 TrelloApiError、解析 JSON。
"""

import logging
from typing import Any, Dict, Iterable, Optional

import httpx

from trello_sync.core.client import RetryableHTTPError, TrelloClient, get_trello_client
from trello_sync.core.errors import TrelloApiError

logger = logging.getLogger(__name__)


def fields_param(fields: Optional[Iterable[str]]) -> Optional[str]:
    """字段列表 -> Trello 的 fields 查询参数"""
    if fields is None:
        return None
    return ",".join(sorted(set(fields)))


class BaseAPI:
    def __init__(self, client: Optional[TrelloClient] = None):
        self.client = client or get_trello_client()

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        发送请求并返回解析后的 JSON

        Args:
            method: HTTP 方法 (GET, POST, PUT, DELETE)
            path: API 路径
            params: 查询参数，值为 None 的参数不发送
            json: 请求体

        Returns:
            JSON 数据，响应体为空时返回 {}

        Raises:
            TrelloApiError: HTTP 状态码 >= 400
        """
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        try:
            if method == "GET":
                resp = await self.client.get(path, params=params or None)
            elif method == "POST":
                resp = await self.client.post(path, json=json, params=params or None)
            elif method == "PUT":
                resp = await self.client.put(path, json=json, params=params or None)
            elif method == "DELETE":
                resp = await self.client.delete(path, params=params or None)
            else:
                raise ValueError(f"Unsupported HTTP method: {method}")
            resp.raise_for_status()
        except RetryableHTTPError as e:
            logger.error(
                "%s %s failed after retries: HTTP %d",
                method,
                path,
                e.response.status_code,
            )
            raise TrelloApiError(
                e.response.status_code, e.response.text, method, path
            ) from e
        except httpx.HTTPStatusError as e:
            logger.error(
                "%s %s failed: HTTP %d: %s",
                method,
                path,
                e.response.status_code,
                e.response.text[:200],
            )
            raise TrelloApiError(
                e.response.status_code, e.response.text, method, path
            ) from e

        if not resp.content:
            return {}
        return resp.json()
