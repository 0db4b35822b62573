"""
TrelloEntity - 所有实体的基类

实体本身只保存 ID，字段数据由 SynchronizationContext 管理:
- card.name             读取本地值，不发请求
- await card.fetch("name")  懒加载读取，未加载或过期时先同步
- await card.update(name="...")  校验后提交局部更新

实体通过 get / from_json 构造，同一个 ID 在进程内只对应一个对象。
"""

import logging
from datetime import datetime
from typing import (
    Any,
    Callable,
    ClassVar,
    Dict,
    FrozenSet,
    Iterable,
    List,
    Mapping,
    Optional,
    Type,
    TypeVar,
)

from pydantic import BaseModel, ValidationError

from trello_sync.core.cache import entity_cache
from trello_sync.core.client import TrelloClient
from trello_sync.core.errors import TrelloError, TrelloValidationError
from trello_sync.core.fields import SyncedField
from trello_sync.core.sync import SynchronizationContext, deep_merge
from trello_sync.core.utils import extract_creation_date
from trello_sync.core.validation import ensure_valid

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="TrelloEntity")
Subscriber = Callable[["TrelloEntity", List[str]], None]


class TrelloEntity:
    schema: ClassVar[Type[BaseModel]]
    api_class: ClassVar[Type[Any]]
    # 拉取时请求的字段（属性名），None 表示全部同步字段
    downloaded_fields: ClassVar[Optional[FrozenSet[str]]] = None
    display_field: ClassVar[str] = "name"
    supports_update: ClassVar[bool] = True
    supports_delete: ClassVar[bool] = False

    _registry: ClassVar[Dict[str, Type["TrelloEntity"]]] = {}
    _fields: ClassVar[Dict[str, SyncedField]] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        fields: Dict[str, SyncedField] = {}
        for klass in reversed(cls.__mro__):
            for name, value in vars(klass).items():
                if isinstance(value, SyncedField):
                    fields[name] = value
        cls._fields = fields
        TrelloEntity._registry[cls.__name__] = cls

    def __init__(
        self,
        entity_id: str,
        json: Optional[Mapping[str, Any]] = None,
        *,
        client: Optional[TrelloClient] = None,
    ):
        """
        Args:
            entity_id: Trello ID（或短链接，首次同步后替换为真实 ID）
            json: 初始数据 (可选)
            client: TrelloClient，不传则使用全局单例
        """
        self.id = entity_id
        self._client = client
        self._api_instance = None
        self._subscribers: List[Subscriber] = []
        self._context = SynchronizationContext(
            self.schema,
            fetch=self._fetch,
            submit=self._submit if self.supports_update else None,
            remove=self._remove if self.supports_delete else None,
            name=f"{type(self).__name__}({entity_id})",
        )
        self._context.add_listener(self._synchronized)

        entity_cache.add(self)

        if json:
            self._context.merge(json)

    # ========== 构造 ==========

    @classmethod
    def get(
        cls: Type[T],
        entity_id: str,
        json: Optional[Mapping[str, Any]] = None,
        *,
        client: Optional[TrelloClient] = None,
        **kwargs: Any,
    ) -> T:
        """
        获取实体（身份缓存优先）

        缓存中已有同 ID 的实体时直接复用，并把 json 合并进去。
        """
        entity = entity_cache.get_or_create(
            cls, entity_id, lambda: cls(entity_id, client=client, **kwargs)
        )
        if json:
            entity.merge(json)
        return entity

    @classmethod
    def from_json(
        cls: Type[T],
        json: Mapping[str, Any],
        *,
        client: Optional[TrelloClient] = None,
        **kwargs: Any,
    ) -> T:
        entity_id = json.get("id")
        if not entity_id:
            raise TrelloError(f"{cls.__name__} 数据缺少 id: {json!r}")
        return cls.get(entity_id, json, client=client, **kwargs)

    # ========== 数据同步 ==========

    @property
    def _api(self):
        if self._api_instance is None:
            self._api_instance = self.api_class(self._client)
        return self._api_instance

    @property
    def is_deleted(self) -> bool:
        return self._context.is_deleted

    @property
    def creation_date(self) -> Optional[datetime]:
        return extract_creation_date(self.id)

    def merge(self, json: Mapping[str, Any], overwrite: bool = True) -> List[str]:
        """合并局部数据，返回变化的字段名"""
        return self._field_names(self._context.merge(json, overwrite))

    async def refresh(self, force: bool = False) -> List[str]:
        """
        从远端同步

        Args:
            force: 忽略 refresh throttle 强制拉取

        Returns:
            变化的字段名
        """
        return self._field_names(await self._context.synchronize(force=force))

    async def fetch(self, name: str) -> Any:
        """懒加载读取字段，未加载或过期时先从远端同步"""
        field = self._get_field(name)
        await self._context.ensure(field.attr)
        return field.__get__(self, type(self))

    async def update(self, **changes: Any) -> List[str]:
        """
        修改字段并提交

        所有值先在本地校验，全部通过后合并为一次请求提交。

        Returns:
            变化的字段名

        Raises:
            AttributeError: 字段不存在或只读
            TrelloValidationError: 校验失败，请求未发送
            TrelloApiError: 远端请求失败
        """
        if not changes:
            return []
        if not self.supports_update:
            raise TrelloError(f"{type(self).__name__} 不支持修改")

        payload: Dict[str, Any] = {}
        local: Dict[str, Any] = {}
        for name, value in changes.items():
            field = self._get_field(name)
            if field.readonly:
                raise AttributeError(f"{type(self).__name__}.{name} 是只读字段")
            ensure_valid(value, field.rules)
            payload[field.json_name] = field.serialize(value)
            deep_merge(local, field.to_changes(value), overwrite=True)

        # 字段规则之外再按 schema 校验一次，不合法的值不会发送到远端
        try:
            validated = self.schema.model_validate(local)
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
            raise TrelloValidationError(changes, errors) from e

        logger.info(
            "Updating %s id=%s: fields=%s", type(self).__name__, self.id, list(changes)
        )
        return self._field_names(await self._context.submit(validated, payload))

    async def delete(self) -> None:
        """
        删除远端实体并移出身份缓存（不可恢复）
        """
        if not self.supports_delete:
            raise TrelloError(f"{type(self).__name__} 不支持删除")
        await self._context.delete()
        entity_cache.remove(self)

    def snapshot(self) -> Dict[str, Any]:
        """本地数据的副本"""
        return self._context.snapshot()

    # ========== 事件 ==========

    def subscribe(self, callback: Subscriber) -> None:
        """订阅数据变化，callback(entity, field_names)"""
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Subscriber) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def _synchronized(self, changed: List[str]) -> None:
        if "id" in changed:
            new_id = self._context.peek("id")
            if new_id and new_id != self.id:
                old_id = self.id
                self.id = new_id
                entity_cache.reindex(self, old_id)

        names = self._field_names(changed)
        for callback in list(self._subscribers):
            callback(self, names)

    # ========== 内部工具 ==========

    @classmethod
    def _get_field(cls, name: str) -> SyncedField:
        field = cls._fields.get(name)
        if field is None:
            raise AttributeError(f"{cls.__name__} 没有字段 '{name}'")
        return field

    @classmethod
    def _field_names(cls, attrs: Iterable[str]) -> List[str]:
        attrs = set(attrs)
        names = [f.name for f in cls._fields.values() if f.root in attrs]
        if "id" in attrs:
            names.append("id")
        return names

    @classmethod
    def _query_fields(cls) -> List[str]:
        """downloaded_fields -> 请求中的 JSON 字段名"""
        selected = cls.downloaded_fields
        keys = set()
        for field in cls._fields.values():
            if selected is not None and field.name not in selected:
                continue
            info = cls.schema.model_fields[field.root]
            keys.add(info.alias or field.root)
        return sorted(keys)

    def _reference(self, class_name: str, entity_id: str) -> "TrelloEntity":
        return self._registry[class_name].get(entity_id, client=self._client)

    async def _fetch(self) -> Dict[str, Any]:
        raise NotImplementedError

    async def _submit(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    async def _remove(self) -> None:
        raise NotImplementedError

    def __str__(self) -> str:
        value = self._context.peek(self._get_field(self.display_field).attr)
        return str(value) if value else self.id

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r}>"
