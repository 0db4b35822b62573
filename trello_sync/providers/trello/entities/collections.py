"""
实体集合

集合保存所属实体和一个拉取函数，refresh 时每条数据都经过身份缓存:
已存在的实体复用并合并新数据，不会出现同一 ID 的两个对象。

    for card in board.cards:            # 本地缓存的条目，不发请求
    async for card in board.cards:      # 先刷新再遍历
    todo = await board.lists.get("To Do")
"""

import logging
import time
from typing import (
    Any,
    AsyncIterator,
    Awaitable,
    Callable,
    Dict,
    Generic,
    Iterator,
    List,
    Optional,
    TypeVar,
    Union,
)

from trello_sync.core.config import settings
from trello_sync.core.errors import TrelloValidationError
from trello_sync.core.validation import (
    NotNullOrWhiteSpaceRule,
    PositionRule,
    UriRule,
    ensure_valid,
)
from trello_sync.providers.trello.api import AttachmentAPI, BoardAPI, CardAPI, ListAPI

from .base import TrelloEntity

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=TrelloEntity)
FetchItems = Callable[[Dict[str, Any]], Awaitable[List[Dict[str, Any]]]]


class ReadOnlyCollection(Generic[E]):
    # 按名称匹配时使用的字段
    match_fields = ("name",)

    def __init__(
        self,
        owner: TrelloEntity,
        entity_class: str,
        fetch: FetchItems,
        limit: Optional[int] = None,
    ):
        """
        Args:
            owner: 所属实体
            entity_class: 条目的实体类名
            fetch: 拉取函数，参数为查询参数，返回 JSON 列表
            limit: 最多返回的条目数 (可选)
        """
        self.owner = owner
        self.entity_class = entity_class
        self._fetch = fetch
        self._items: List[E] = []
        self._last_refreshed: Optional[float] = None
        self.limit = limit

    @property
    def limit(self) -> Optional[int]:
        return self._limit

    @limit.setter
    def limit(self, value: Optional[int]) -> None:
        if value is not None and (
            isinstance(value, bool) or not isinstance(value, int) or value <= 0
        ):
            raise TrelloValidationError(value, ["limit 必须是正整数"])
        self._limit = value

    @property
    def owner_id(self) -> str:
        return self.owner.id

    @property
    def _cls(self):
        return TrelloEntity._registry[self.entity_class]

    def _entity_kwargs(self) -> Dict[str, Any]:
        """构造条目实体时的额外参数"""
        return {}

    def _params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {"fields": ",".join(self._cls._query_fields())}
        if self._limit is not None:
            params["limit"] = self._limit
        return params

    def _is_expired(self) -> bool:
        if self._last_refreshed is None:
            return True
        return time.time() - self._last_refreshed > settings.TRELLO_REFRESH_THROTTLE

    async def refresh(self, force: bool = False) -> None:
        """
        重新拉取条目

        Args:
            force: 忽略 refresh throttle 强制拉取
        """
        if not force and not self._is_expired():
            logger.debug(
                "Skip refresh %s of %r: within refresh throttle",
                type(self).__name__,
                self.owner,
            )
            return

        data = await self._fetch(self._params())
        self._items = [self._wrap(item) for item in data]
        self._last_refreshed = time.time()
        logger.debug(
            "Refreshed %s of %r: %d items", type(self).__name__, self.owner, len(self._items)
        )

    def _wrap(self, json: Dict[str, Any]) -> E:
        return self._cls.from_json(
            json, client=self.owner._client, **self._entity_kwargs()
        )

    def _append(self, entity: E) -> None:
        if entity not in self._items:
            self._items.append(entity)

    async def get(self, key: str) -> Optional[E]:
        """
        按 ID 或名称查找条目（区分大小写）

        Returns:
            匹配的实体，未找到返回 None
        """
        await self.refresh()
        for item in self._items:
            if item.id == key:
                return item
            for name in self.match_fields:
                if getattr(item, name) == key:
                    return item
        return None

    async def all(self) -> List[E]:
        await self.refresh()
        return list(self._items)

    def __iter__(self) -> Iterator[E]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> E:
        return self._items[index]

    async def __aiter__(self) -> AsyncIterator[E]:
        await self.refresh()
        for item in list(self._items):
            yield item

    def __repr__(self) -> str:
        return f"<{type(self).__name__} owner={self.owner!r} items={len(self._items)}>"


class ReadOnlyMemberCollection(ReadOnlyCollection):
    match_fields = ("username", "full_name")

    def __init__(self, owner: TrelloEntity, fetch: FetchItems, limit: Optional[int] = None):
        super().__init__(owner, "Member", fetch, limit)


class ReadOnlyBoardCollection(ReadOnlyCollection):
    def __init__(self, owner: TrelloEntity, fetch: FetchItems, limit: Optional[int] = None):
        super().__init__(owner, "Board", fetch, limit)


class BoardCollection(ReadOnlyBoardCollection):
    """组织下的看板，可创建新看板"""

    async def add(self, name: str, description: Optional[str] = None):
        """
        在组织下创建看板

        Raises:
            TrelloValidationError: 名称为空
        """
        ensure_valid(name, [NotNullOrWhiteSpaceRule()])

        data = await BoardAPI(self.owner._client).create_board(
            name, organization_id=self.owner_id, description=description
        )
        board = self._wrap(data)
        self._append(board)
        return board


class ReadOnlyOrganizationCollection(ReadOnlyCollection):
    match_fields = ("name", "display_name")

    def __init__(self, owner: TrelloEntity, fetch: FetchItems, limit: Optional[int] = None):
        super().__init__(owner, "Organization", fetch, limit)


class ReadOnlyListCollection(ReadOnlyCollection):
    def __init__(self, owner: TrelloEntity, fetch: FetchItems, limit: Optional[int] = None):
        super().__init__(owner, "BoardList", fetch, limit)


class ListCollection(ReadOnlyListCollection):
    """看板下的列表，可创建新列表"""

    async def add(self, name: str, position: Optional[Union[float, str]] = None):
        """
        在看板中创建列表

        Args:
            name: 列表名称
            position: 位置，正数或 "top" / "bottom" (可选)

        Raises:
            TrelloValidationError: 名称为空或位置无效
        """
        ensure_valid(name, [NotNullOrWhiteSpaceRule()])
        if position is not None:
            ensure_valid(position, [PositionRule()])

        data = await ListAPI(self.owner._client).create_list(
            name, self.owner_id, position=position
        )
        board_list = self._wrap(data)
        self._append(board_list)
        return board_list


class ReadOnlyCardCollection(ReadOnlyCollection):
    def __init__(self, owner: TrelloEntity, fetch: FetchItems, limit: Optional[int] = None):
        super().__init__(owner, "Card", fetch, limit)


class CardCollection(ReadOnlyCardCollection):
    """列表中的卡片，可创建新卡片"""

    async def add(
        self,
        name: str,
        description: Optional[str] = None,
        position: Optional[Union[float, str]] = None,
    ):
        """
        在列表中创建卡片

        Raises:
            TrelloValidationError: 名称为空或位置无效
        """
        ensure_valid(name, [NotNullOrWhiteSpaceRule()])
        if position is not None:
            ensure_valid(position, [PositionRule()])

        data = await CardAPI(self.owner._client).create_card(
            name, self.owner_id, description=description, position=position
        )
        card = self._wrap(data)
        self._append(card)
        return card


class AttachmentCollection(ReadOnlyCollection):
    """卡片附件，可添加 URL 附件"""

    def __init__(self, owner: TrelloEntity, fetch: FetchItems, limit: Optional[int] = None):
        super().__init__(owner, "Attachment", fetch, limit)

    def _entity_kwargs(self) -> Dict[str, Any]:
        return {"card_id": self.owner_id}

    async def add(self, url: str, name: Optional[str] = None):
        """
        以 URL 形式添加附件

        Raises:
            TrelloValidationError: URL 无效
        """
        ensure_valid(url, [UriRule()])

        data = await AttachmentAPI(self.owner._client).add_attachment(
            self.owner_id, url, name=name
        )
        attachment = self._wrap(data)
        self._append(attachment)
        return attachment
