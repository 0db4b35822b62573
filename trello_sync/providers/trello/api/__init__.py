"""
Trello API 层 - 原子能力封装

每个类对应一种 REST 资源，只负责请求与错误转换，不做缓存。

使用示例:
    from trello_sync.providers.trello.api import BoardAPI

    board_api = BoardAPI()
    board = await board_api.get_board("5a1b2c3d4e5f6a7b8c9d0e1f", fields=["name"])
"""

from .attachments import AttachmentAPI
from .base import BaseAPI
from .boards import BoardAPI
from .cards import CardAPI
from .lists import ListAPI
from .members import MemberAPI
from .organizations import OrganizationAPI

__all__ = [
    "BaseAPI",
    "AttachmentAPI",
    "BoardAPI",
    "CardAPI",
    "ListAPI",
    "MemberAPI",
    "OrganizationAPI",
]
