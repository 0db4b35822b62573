"""
trello_sync - Trello 实体同步客户端

    from trello_sync import TrelloFactory

    factory = TrelloFactory.get_instance()
    board = factory.board("5a1b2c3d4e5f6a7b8c9d0e1f")
    name = await board.fetch("name")
    await board.update(description="Sprint 12")
"""

from trello_sync.core.client import TrelloClient, get_trello_client
from trello_sync.core.config import settings
from trello_sync.core.errors import (
    AuthorizationError,
    EntityDeletedError,
    TrelloApiError,
    TrelloError,
    TrelloValidationError,
)
from trello_sync.providers.trello.entities import (
    Attachment,
    Board,
    BoardList,
    BoardPermissionLevel,
    Card,
    Member,
    Organization,
    OrganizationPermissionLevel,
)
from trello_sync.providers.trello.managers import TrelloFactory

__all__ = [
    "Attachment",
    "AuthorizationError",
    "Board",
    "BoardList",
    "BoardPermissionLevel",
    "Card",
    "EntityDeletedError",
    "Member",
    "Organization",
    "OrganizationPermissionLevel",
    "TrelloApiError",
    "TrelloClient",
    "TrelloError",
    "TrelloFactory",
    "TrelloValidationError",
    "get_trello_client",
    "settings",
]
