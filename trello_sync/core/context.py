from contextvars import ContextVar
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from trello_sync.core.auth import TrelloAuthorization

# 当前任务使用的授权信息，未设置时回退到配置文件
auth_context: ContextVar[Optional["TrelloAuthorization"]] = ContextVar(
    "trello_auth", default=None
)
