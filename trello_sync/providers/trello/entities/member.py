from typing import Any, Dict, Mapping, Optional

from trello_sync.core.client import TrelloClient
from trello_sync.core.fields import SyncedField
from trello_sync.core.validation import MaxLengthRule, NotNullOrWhiteSpaceRule, UsernameRule
from trello_sync.providers.trello.api import MemberAPI
from trello_sync.schemas.trello import JsonMember

from .base import TrelloEntity
from .collections import ReadOnlyBoardCollection, ReadOnlyOrganizationCollection


class Member(TrelloEntity):
    """Trello 用户，不支持删除"""

    schema = JsonMember
    api_class = MemberAPI
    display_field = "full_name"

    full_name = SyncedField(rules=[NotNullOrWhiteSpaceRule()])
    initials = SyncedField(rules=[NotNullOrWhiteSpaceRule(), MaxLengthRule(4)])
    bio = SyncedField(rules=[MaxLengthRule(16384)])
    username = SyncedField(rules=[UsernameRule()])
    avatar_hash = SyncedField(readonly=True)
    url = SyncedField(readonly=True)
    is_confirmed = SyncedField("confirmed", readonly=True)
    member_type = SyncedField(readonly=True)
    status = SyncedField(readonly=True)

    def __init__(
        self,
        entity_id: str,
        json: Optional[Mapping[str, Any]] = None,
        *,
        client: Optional[TrelloClient] = None,
    ):
        super().__init__(entity_id, json, client=client)
        self.boards = ReadOnlyBoardCollection(
            self, lambda params: self._api.get_boards(self.id, params)
        )
        self.organizations = ReadOnlyOrganizationCollection(
            self, lambda params: self._api.get_organizations(self.id, params)
        )

    async def _fetch(self) -> Dict[str, Any]:
        return await self._api.get_member(self.id, fields=self._query_fields())

    async def _submit(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._api.update_member(self.id, payload)
