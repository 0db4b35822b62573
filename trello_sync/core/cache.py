"""
EntityCache - 进程级实体身份缓存

以 Trello ID 为键保存本地实体对象，保证同一个远端实体在进程内
只对应一个本地对象。工厂、集合和引用字段都通过 get_or_create 获取实体。
"""

import logging
import threading
from typing import Any, Callable, Dict, Optional, Type, TypeVar

from trello_sync.core.config import settings

logger = logging.getLogger(__name__)

E = TypeVar("E")


class EntityCache:
    def __init__(self, enabled: Optional[bool] = None):
        self.enabled = settings.TRELLO_CACHE_ENABLED if enabled is None else enabled
        self._entities: Dict[str, Any] = {}
        self._lock = threading.RLock()
        logger.debug("EntityCache initialized (enabled=%s)", self.enabled)

    def add(self, entity: Any) -> None:
        if not self.enabled:
            return
        with self._lock:
            existing = self._entities.get(entity.id)
            if existing is not None and existing is not entity:
                logger.warning(
                    "Cache collision: replacing %s with %s for id=%s",
                    type(existing).__name__,
                    type(entity).__name__,
                    entity.id,
                )
            self._entities[entity.id] = entity
            logger.debug("Cache add: %s id=%s", type(entity).__name__, entity.id)

    def find(self, cls: Type[E], entity_id: str) -> Optional[E]:
        if not self.enabled:
            return None
        with self._lock:
            entity = self._entities.get(entity_id)
        if entity is None or not isinstance(entity, cls):
            logger.debug("Cache miss: %s id=%s", cls.__name__, entity_id)
            return None
        logger.debug("Cache hit: %s id=%s", cls.__name__, entity_id)
        return entity

    def get_or_create(
        self, cls: Type[E], entity_id: str, create: Callable[[], E]
    ) -> E:
        """
        查找缓存中的实体，不存在时调用 create 构造

        create 在锁内执行，并发调用方不会为同一个 ID 构造两个对象。
        实体构造函数会自行调用 add 注册。
        """
        with self._lock:
            entity = self.find(cls, entity_id)
            if entity is not None:
                return entity
            return create()

    def reindex(self, entity: Any, old_id: str) -> None:
        """实体 ID 变化后（如短链接解析为真实 ID）移动缓存键"""
        if not self.enabled:
            return
        with self._lock:
            if self._entities.get(old_id) is entity:
                del self._entities[old_id]
            self.add(entity)
            logger.debug("Cache reindex: %s -> %s", old_id, entity.id)

    def remove(self, entity: Any) -> None:
        with self._lock:
            if self._entities.get(entity.id) is entity:
                del self._entities[entity.id]
                logger.debug(
                    "Cache remove: %s id=%s", type(entity).__name__, entity.id
                )

    def clear(self) -> None:
        with self._lock:
            cache_size = len(self._entities)
            self._entities.clear()
        logger.info("Entity cache cleared: removed %d entries", cache_size)

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._entities


# Singleton instance
entity_cache = EntityCache()
