"""
TrelloClient - Trello REST API 异步客户端
"""

import logging
import threading
from typing import Optional

import httpx
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from trello_sync.core.auth import TrelloAuth
from trello_sync.core.config import settings

logger = logging.getLogger(__name__)

_trello_client = None
_trello_client_lock = threading.Lock()  # 线程安全锁

# 定义可重试的异常类型
RETRYABLE_EXCEPTIONS = (
    httpx.ConnectError,
    httpx.TimeoutException,
)


def _should_retry_response(response: httpx.Response) -> bool:
    """检查响应是否需要重试（5xx 服务端错误）"""
    return response.status_code >= 500


class RetryableHTTPError(Exception):
    """可重试的 HTTP 错误"""

    def __init__(self, response: httpx.Response):
        self.response = response
        super().__init__(f"HTTP {response.status_code}: {response.text[:200]}")


class TrelloClient:
    """
    Trello API 异步客户端

    特性:
    - 自动注入认证头 (Authorization: OAuth ...)
    - 网络错误、超时、5xx 错误自动重试
    - 指数退避策略

    4xx 响应原样返回，由 API 层转换为 TrelloApiError。
    """

    RETRY_MIN_WAIT = 1  # 最小等待时间（秒）
    RETRY_MAX_WAIT = 10  # 最大等待时间（秒）

    def __init__(
        self,
        base_url: Optional[str] = None,
        max_retries: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = base_url or settings.TRELLO_BASE_URL
        self.max_retries = max(1, max_retries or settings.TRELLO_MAX_RETRIES)
        logger.info("Initializing TrelloClient with base_url=%s", self.base_url)
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Content-Type": "application/json"},
            auth=TrelloAuth(),
            timeout=httpx.Timeout(timeout or settings.TRELLO_HTTP_TIMEOUT),
            trust_env=False,
        )
        logger.debug("TrelloClient initialized successfully")

    def _get_retry_decorator(self):
        """获取重试装饰器配置"""
        return retry(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(
                multiplier=1, min=self.RETRY_MIN_WAIT, max=self.RETRY_MAX_WAIT
            ),
            retry=retry_if_exception_type(RETRYABLE_EXCEPTIONS + (RetryableHTTPError,)),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

    async def _request_with_retry(
        self,
        method: str,
        path: str,
        json: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> httpx.Response:
        """
        带重试的请求方法

        Args:
            method: HTTP 方法 (GET, POST, PUT, DELETE)
            path: API 路径，相对于 base_url
            json: 请求体 (可选)
            params: 查询参数 (可选)

        Returns:
            httpx.Response

        Raises:
            RetryableHTTPError: 重试耗尽后仍为 5xx
            AuthorizationError: 未配置授权信息
        """

        @self._get_retry_decorator()
        async def _do_request():
            logger.debug("Making %s request to %s", method, path)
            if method == "GET":
                response = await self.client.get(path, params=params)
            elif method == "POST":
                logger.debug("POST payload: %s", json)
                response = await self.client.post(path, json=json, params=params)
            elif method == "PUT":
                logger.debug("PUT payload: %s", json)
                response = await self.client.put(path, json=json, params=params)
            elif method == "DELETE":
                response = await self.client.delete(path, params=params)
            else:
                logger.error("Unsupported HTTP method: %s", method)
                raise ValueError(f"Unsupported HTTP method: {method}")

            logger.debug("Response status: %d from %s", response.status_code, path)

            # 5xx 错误触发重试
            if _should_retry_response(response):
                logger.warning(
                    "Received %d from %s, will retry...", response.status_code, path
                )
                raise RetryableHTTPError(response)

            if response.status_code >= 400:
                logger.error(
                    "HTTP error %d from %s: %s",
                    response.status_code,
                    path,
                    response.text[:200],
                )
            else:
                logger.info(
                    "Request successful: %s %s -> %d",
                    method,
                    path,
                    response.status_code,
                )

            return response

        return await _do_request()

    async def get(self, path: str, params: Optional[dict] = None) -> httpx.Response:
        """GET 请求（带自动重试）"""
        return await self._request_with_retry("GET", path, params=params)

    async def post(
        self, path: str, json: Optional[dict] = None, params: Optional[dict] = None
    ) -> httpx.Response:
        """POST 请求（带自动重试）"""
        return await self._request_with_retry("POST", path, json=json, params=params)

    async def put(
        self, path: str, json: Optional[dict] = None, params: Optional[dict] = None
    ) -> httpx.Response:
        """PUT 请求（带自动重试）"""
        return await self._request_with_retry("PUT", path, json=json, params=params)

    async def delete(self, path: str, params: Optional[dict] = None) -> httpx.Response:
        """DELETE 请求（带自动重试）"""
        return await self._request_with_retry("DELETE", path, params=params)

    async def close(self):
        """关闭客户端连接"""
        logger.info("Closing TrelloClient connection")
        await self.client.aclose()
        logger.debug("TrelloClient connection closed")


def get_trello_client() -> TrelloClient:
    """
    获取全局单例客户端（线程安全）

    使用双重检查锁定模式，防止多线程/多协程并发时重复实例化。

    Returns:
        TrelloClient: Trello API 客户端实例
    """
    global _trello_client

    # 快速路径：已初始化则直接返回
    if _trello_client is not None:
        logger.debug("Reusing existing TrelloClient singleton instance")
        return _trello_client

    # 慢路径：使用锁保护初始化
    with _trello_client_lock:
        if _trello_client is not None:
            logger.debug("Reusing existing TrelloClient singleton instance (after lock)")
            return _trello_client

        logger.debug("Creating new TrelloClient singleton instance")
        _trello_client = TrelloClient()

    return _trello_client
