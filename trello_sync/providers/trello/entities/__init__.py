"""
Trello 实体层 - 带懒加载与身份缓存的领域对象

使用示例:
    from trello_sync.providers.trello.entities import Card

    card = Card.get("5a1b2c3d4e5f6a7b8c9d0e1f")
    name = await card.fetch("name")     # 首次访问时从远端同步
    await card.update(name="New name")  # 局部更新，不影响其他字段
"""

from .attachment import Attachment
from .base import TrelloEntity
from .board import Board
from .board_list import BoardList
from .card import Card
from .collections import (
    AttachmentCollection,
    BoardCollection,
    CardCollection,
    ListCollection,
    ReadOnlyBoardCollection,
    ReadOnlyCardCollection,
    ReadOnlyCollection,
    ReadOnlyListCollection,
    ReadOnlyMemberCollection,
    ReadOnlyOrganizationCollection,
)
from .enums import BoardPermissionLevel, OrganizationPermissionLevel
from .member import Member
from .organization import Organization

__all__ = [
    "TrelloEntity",
    "Attachment",
    "Board",
    "BoardList",
    "Card",
    "Member",
    "Organization",
    "BoardPermissionLevel",
    "OrganizationPermissionLevel",
    "ReadOnlyCollection",
    "ReadOnlyBoardCollection",
    "ReadOnlyCardCollection",
    "ReadOnlyListCollection",
    "ReadOnlyMemberCollection",
    "ReadOnlyOrganizationCollection",
    "AttachmentCollection",
    "BoardCollection",
    "CardCollection",
    "ListCollection",
]
