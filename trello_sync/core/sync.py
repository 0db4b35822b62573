"""
SynchronizationContext - 实体字段的同步上下文

每个实体持有一个上下文，负责:
1. 懒加载: 字段首次访问（或数据过期）时从远端拉取
2. 局部合并: 远端返回的部分数据只覆盖出现的字段，不影响其他字段
3. 提交更新: 把局部修改发送到远端，并合并返回结果

本地数据以 schema 字段名为键保存（嵌套对象为嵌套 dict）。
"""

import asyncio
import copy
import logging
import time
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Type, Union

from pydantic import BaseModel

from trello_sync.core.config import settings
from trello_sync.core.errors import EntityDeletedError, TrelloError

logger = logging.getLogger(__name__)

FetchFunc = Callable[[], Awaitable[Dict[str, Any]]]
SubmitFunc = Callable[[Dict[str, Any]], Awaitable[Dict[str, Any]]]
RemoveFunc = Callable[[], Awaitable[Any]]
Listener = Callable[[List[str]], None]

_MISSING = object()


def deep_merge(target: Dict[str, Any], incoming: Mapping[str, Any], overwrite: bool) -> List[str]:
    """
    把 incoming 合并进 target，返回值发生变化的顶层键

    嵌套 dict 递归合并，incoming 中没有的键保持不变。
    """
    changed = []
    for key, value in incoming.items():
        current = target.get(key, _MISSING)
        if current is not _MISSING and not overwrite:
            continue
        if isinstance(current, dict) and isinstance(value, dict):
            if deep_merge(current, value, overwrite):
                changed.append(key)
            continue
        if current is not _MISSING and current == value:
            continue
        target[key] = copy.deepcopy(value)
        changed.append(key)
    return changed


class SynchronizationContext:
    def __init__(
        self,
        schema: Type[BaseModel],
        fetch: FetchFunc,
        submit: Optional[SubmitFunc] = None,
        remove: Optional[RemoveFunc] = None,
        refresh_throttle: Optional[float] = None,
        name: str = "",
    ):
        """
        Args:
            schema: 远端 JSON 对应的 pydantic 模型
            fetch: 拉取完整数据的协程函数
            submit: 提交更新的协程函数，参数为远端格式的 payload
            remove: 删除远端实体的协程函数
            refresh_throttle: 数据有效期（秒），默认取 TRELLO_REFRESH_THROTTLE
            name: 日志中使用的实体标识
        """
        self.schema = schema
        self.name = name or schema.__name__
        self.refresh_throttle = (
            settings.TRELLO_REFRESH_THROTTLE
            if refresh_throttle is None
            else refresh_throttle
        )
        self._fetch = fetch
        self._submit = submit
        self._remove = remove

        self._values: Dict[str, Any] = {}
        self._last_merged: Optional[float] = None
        self._last_fetched: Optional[float] = None
        self._deleted = False
        self._lock = asyncio.Lock()
        self._listeners: List[Listener] = []

    @property
    def loaded(self) -> frozenset:
        """已加载的顶层字段"""
        return frozenset(self._values)

    @property
    def is_deleted(self) -> bool:
        return self._deleted

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _check_deleted(self) -> None:
        if self._deleted:
            raise EntityDeletedError(self.name)

    @staticmethod
    def _is_cache_expired(last_loaded: Optional[float], ttl: float) -> bool:
        if last_loaded is None:
            return True
        return time.time() - last_loaded > ttl

    def is_expired(self) -> bool:
        """本地数据是否过期（从未合并过也视为过期）"""
        return self._is_cache_expired(self._last_merged, self.refresh_throttle)

    def peek(self, path: str) -> Any:
        """读取本地值，不触发网络请求。path 支持 "prefs.permission_level" 形式"""
        value: Any = self._values
        for part in path.split("."):
            if not isinstance(value, dict):
                return None
            value = value.get(part)
        return value

    def snapshot(self) -> Dict[str, Any]:
        return copy.deepcopy(self._values)

    def _merge(self, data: Union[Mapping[str, Any], BaseModel], overwrite: bool) -> List[str]:
        if not isinstance(data, BaseModel):
            data = self.schema.model_validate(data)
        incoming = data.model_dump(exclude_unset=True)
        changed = deep_merge(self._values, incoming, overwrite)
        self._last_merged = time.time()
        return changed

    def _notify(self, changed: List[str]) -> None:
        if not changed:
            return
        logger.debug("Merged %s: changed=%s", self.name, changed)
        for listener in list(self._listeners):
            listener(changed)

    def merge(
        self, data: Union[Mapping[str, Any], BaseModel], overwrite: bool = True
    ) -> List[str]:
        """
        合并局部数据

        Args:
            data: 远端 JSON（camelCase）或以字段名为键的 dict，只处理其中出现的键
            overwrite: False 时只填充尚未加载的字段

        Returns:
            值发生变化的顶层字段名列表

        Raises:
            pydantic.ValidationError: 数据格式不符合 schema
        """
        changed = self._merge(data, overwrite)
        self._notify(changed)
        return changed

    def _fetch_expired(self) -> bool:
        return self._is_cache_expired(self._last_fetched, self.refresh_throttle)

    async def synchronize(self, force: bool = False) -> List[str]:
        """
        从远端拉取并合并数据

        在 refresh_throttle 时间内已拉取过则跳过（force=True 时除外）。

        Returns:
            值发生变化的字段名列表

        Raises:
            EntityDeletedError: 实体已删除
            TrelloApiError: 远端请求失败
        """
        self._check_deleted()

        # 第一重检查 (无锁，快速路径)
        if not force and not self._fetch_expired():
            logger.debug("Skip synchronize %s: within refresh throttle", self.name)
            return []

        # 第二重检查 (加锁，防止并发重复拉取)
        async with self._lock:
            self._check_deleted()
            if not force and not self._fetch_expired():
                return []

            logger.debug("Synchronizing %s", self.name)
            data = await self._fetch()
            self._last_fetched = time.time()
            return self.merge(data)

    async def ensure(self, path: str) -> Any:
        """
        懒加载读取字段

        字段从未加载或数据已过期时先同步，再返回本地值。
        """
        self._check_deleted()
        root = path.split(".")[0]
        if root in self._values and not self.is_expired():
            return self.peek(path)

        await self.synchronize()
        return self.peek(path)

    async def submit(
        self, changes: Union[Mapping[str, Any], BaseModel], payload: Dict[str, Any]
    ) -> List[str]:
        """
        提交局部更新

        Args:
            changes: 以字段名为键的本地新值（或已校验的 schema 实例）
            payload: 发送给远端的 JSON

        Returns:
            值发生变化的字段名列表
        """
        self._check_deleted()
        if self._submit is None:
            raise TrelloError(f"{self.name} 不支持更新")

        async with self._lock:
            response = await self._submit(payload)
            changed = self._merge(changes, overwrite=True)
            if response:
                for name in self._merge(response, overwrite=True):
                    if name not in changed:
                        changed.append(name)
                self._last_fetched = time.time()

        self._notify(changed)
        return changed

    async def delete(self) -> None:
        self._check_deleted()
        if self._remove is None:
            raise TrelloError(f"{self.name} 不支持删除")

        async with self._lock:
            await self._remove()
            self._deleted = True
        logger.info("Deleted %s", self.name)
