"""
Trello 授权信息

Trello 的 REST API 使用 application key + user token 认证，
这里只负责把静态配置注入到请求头中，不处理 token 的申请与续期。
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from trello_sync.core.config import settings
from trello_sync.core.context import auth_context
from trello_sync.core.errors import AuthorizationError
from trello_sync.core.utils import mask_secret

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrelloAuthorization:
    app_key: str
    user_token: Optional[str] = None

    def header_value(self) -> str:
        parts = [f'oauth_consumer_key="{self.app_key}"']
        if self.user_token:
            parts.append(f'oauth_token="{self.user_token}"')
        return "OAuth " + ", ".join(parts)

    def __repr__(self) -> str:
        return (
            f"TrelloAuthorization(app_key={mask_secret(self.app_key)!r}, "
            f"user_token={mask_secret(self.user_token or '')!r})"
        )


def resolve_authorization() -> TrelloAuthorization:
    """
    获取当前生效的授权信息

    优先使用上下文中的授权，其次使用配置文件中的 TRELLO_APP_KEY / TRELLO_USER_TOKEN。

    Returns:
        TrelloAuthorization

    Raises:
        AuthorizationError: 未配置 application key
    """
    override = auth_context.get()
    if override is not None:
        logger.debug("Using context authorization: %r", override)
        return override

    if not settings.TRELLO_APP_KEY:
        logger.error("No Trello credentials found (TRELLO_APP_KEY is not set)")
        raise AuthorizationError(
            "TRELLO_APP_KEY 未配置。请在环境变量或 .env 文件中设置 TRELLO_APP_KEY 和 TRELLO_USER_TOKEN。"
        )

    if not settings.TRELLO_USER_TOKEN:
        # 只有 key 时只能读取公开看板
        logger.warning("TRELLO_USER_TOKEN is not set, only public data is readable")

    return TrelloAuthorization(
        app_key=settings.TRELLO_APP_KEY, user_token=settings.TRELLO_USER_TOKEN
    )


class TrelloAuth(httpx.Auth):
    """
    Custom Auth for the Trello REST API.
    Injects the OAuth style Authorization header on every request.
    """

    def auth_flow(self, request: httpx.Request):
        authorization = resolve_authorization()
        request.headers["Authorization"] = authorization.header_value()
        yield request
