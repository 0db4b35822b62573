"""
TrelloFactory - 实体入口

所有实体都通过身份缓存获取，同一个 Trello ID 在进程内只对应一个对象。

使用示例:
    factory = TrelloFactory.get_instance()

    board = factory.board("5a1b2c3d4e5f6a7b8c9d0e1f")
    await board.refresh()

    me = await factory.me()
    async for my_board in me.boards:
        print(my_board.name)
"""

import asyncio
import logging
from typing import Optional

from trello_sync.core.cache import entity_cache
from trello_sync.core.client import TrelloClient
from trello_sync.core.validation import NotNullOrWhiteSpaceRule, ensure_valid
from trello_sync.providers.trello.api import BoardAPI, MemberAPI, OrganizationAPI
from trello_sync.providers.trello.entities import (
    Attachment,
    Board,
    BoardList,
    Card,
    Member,
    Organization,
)

logger = logging.getLogger(__name__)


class TrelloFactory:
    """
    实体工厂 (Manager Layer)

    设计原则:
    - 不直接调用 HTTP 接口，远端操作委托给 API 类和实体
    - 支持单例模式，全局共享
    """

    _instance: Optional["TrelloFactory"] = None

    def __init__(self, client: Optional[TrelloClient] = None):
        """
        Args:
            client: TrelloClient 实例（可选，默认使用全局单例）
        """
        self.client = client
        self._me: Optional[Member] = None
        self._me_lock = asyncio.Lock()

    @classmethod
    def get_instance(cls) -> "TrelloFactory":
        """获取全局单例实例"""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """重置单例实例（主要用于测试）"""
        cls._instance = None

    def clear_cache(self) -> None:
        """清空身份缓存"""
        self._me = None
        entity_cache.clear()
        logger.debug("TrelloFactory cache cleared")

    # ========== 按 ID 获取 ==========

    def board(self, board_id: str) -> Board:
        return Board.get(board_id, client=self.client)

    def board_list(self, list_id: str) -> BoardList:
        return BoardList.get(list_id, client=self.client)

    def card(self, card_id: str) -> Card:
        return Card.get(card_id, client=self.client)

    def attachment(self, attachment_id: str, card_id: str) -> Attachment:
        return Attachment.get(attachment_id, client=self.client, card_id=card_id)

    def member(self, member_id: str) -> Member:
        return Member.get(member_id, client=self.client)

    def organization(self, organization_id: str) -> Organization:
        return Organization.get(organization_id, client=self.client)

    # ========== 远端操作 ==========

    async def me(self) -> Member:
        """
        获取当前 token 对应的成员

        首次调用请求 /members/me，之后返回缓存的实体。
        """
        if self._me is not None:
            logger.debug("Cache hit: me -> %s", self._me.id)
            return self._me

        async with self._me_lock:
            if self._me is not None:
                return self._me

            data = await MemberAPI(self.client).get_member(
                "me", fields=Member._query_fields()
            )
            self._me = Member.from_json(data, client=self.client)
            logger.info("Resolved current member: %s", self._me.id)
            return self._me

    async def create_board(
        self,
        name: str,
        organization: Optional[Organization] = None,
        description: Optional[str] = None,
    ) -> Board:
        """
        创建看板

        Args:
            name: 看板名称
            organization: 所属组织 (可选)
            description: 描述 (可选)

        Raises:
            TrelloValidationError: 名称为空
        """
        ensure_valid(name, [NotNullOrWhiteSpaceRule()])
        if organization is not None:
            return await organization.boards.add(name, description=description)

        data = await BoardAPI(self.client).create_board(name, description=description)
        return Board.from_json(data, client=self.client)

    async def create_organization(self, display_name: str) -> Organization:
        """
        创建组织

        Raises:
            TrelloValidationError: 显示名称为空
        """
        ensure_valid(display_name, [NotNullOrWhiteSpaceRule()])
        data = await OrganizationAPI(self.client).create_organization(display_name)
        return Organization.from_json(data, client=self.client)
