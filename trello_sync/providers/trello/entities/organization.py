from typing import Any, Dict, Mapping, Optional

from trello_sync.core.client import TrelloClient
from trello_sync.core.fields import SyncedField, enum_value, enumeration
from trello_sync.core.validation import (
    EnumerationRule,
    MaxLengthRule,
    NotNullOrWhiteSpaceRule,
    OrganizationNameRule,
    UriRule,
)
from trello_sync.providers.trello.api import OrganizationAPI
from trello_sync.schemas.trello import JsonOrganization

from .base import TrelloEntity
from .collections import BoardCollection, ReadOnlyMemberCollection
from .enums import OrganizationPermissionLevel


class Organization(TrelloEntity):
    """组织（工作区）"""

    schema = JsonOrganization
    api_class = OrganizationAPI
    display_field = "display_name"
    supports_delete = True

    name = SyncedField(rules=[OrganizationNameRule()])
    display_name = SyncedField(rules=[NotNullOrWhiteSpaceRule()])
    description = SyncedField("desc", rules=[MaxLengthRule(16384)])
    website = SyncedField(rules=[UriRule()])
    permission_level = SyncedField(
        "prefs.permission_level",
        json_name="prefs/permissionLevel",
        converter=enumeration(OrganizationPermissionLevel),
        serializer=enum_value,
        rules=[EnumerationRule(OrganizationPermissionLevel)],
    )
    url = SyncedField(readonly=True)

    def __init__(
        self,
        entity_id: str,
        json: Optional[Mapping[str, Any]] = None,
        *,
        client: Optional[TrelloClient] = None,
    ):
        super().__init__(entity_id, json, client=client)
        self.boards = BoardCollection(
            self, lambda params: self._api.get_boards(self.id, params)
        )
        self.members = ReadOnlyMemberCollection(
            self, lambda params: self._api.get_members(self.id, params)
        )

    async def _fetch(self) -> Dict[str, Any]:
        return await self._api.get_organization(self.id, fields=self._query_fields())

    async def _submit(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._api.update_organization(self.id, payload)

    async def _remove(self) -> None:
        await self._api.delete_organization(self.id)
