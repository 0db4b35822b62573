from typing import Any, List, Optional


class TrelloError(Exception):
    """trello_sync 所有异常的基类"""

    pass


class TrelloApiError(TrelloError):
    """Trello 返回了错误响应（4xx，或重试耗尽后的 5xx）"""

    def __init__(
        self,
        status_code: int,
        message: str,
        method: Optional[str] = None,
        path: Optional[str] = None,
    ):
        self.status_code = status_code
        self.message = message
        self.method = method
        self.path = path
        super().__init__(f"{method} {path} 失败: HTTP {status_code}: {message[:200]}")


class AuthorizationError(TrelloError):
    """未配置授权信息"""

    pass


class TrelloValidationError(TrelloError, ValueError):
    """本地校验失败，请求未发送"""

    def __init__(self, value: Any, errors: List[str]):
        self.value = value
        self.errors = list(errors)
        super().__init__(f"无效的值 {value!r}: {'; '.join(self.errors)}")


class EntityDeletedError(TrelloError):
    """对已删除的实体进行操作"""

    def __init__(self, entity_id: str):
        self.entity_id = entity_id
        super().__init__(f"实体 '{entity_id}' 已被删除")
