from typing import Any, Dict, Mapping, Optional

from trello_sync.core.client import TrelloClient
from trello_sync.core.fields import (
    SyncedField,
    entity_id,
    enum_value,
    enumeration,
    reference,
)
from trello_sync.core.validation import (
    BooleanRule,
    EntityRule,
    EnumerationRule,
    MaxLengthRule,
    NotNullOrWhiteSpaceRule,
    NotNullRule,
)
from trello_sync.providers.trello.api import BoardAPI
from trello_sync.schemas.trello import JsonBoard

from .base import TrelloEntity
from .collections import ListCollection, ReadOnlyCardCollection, ReadOnlyMemberCollection
from .enums import BoardPermissionLevel


class Board(TrelloEntity):
    schema = JsonBoard
    api_class = BoardAPI
    supports_delete = True

    name = SyncedField(rules=[NotNullOrWhiteSpaceRule(), MaxLengthRule(16384)])
    description = SyncedField("desc", rules=[MaxLengthRule(16384)])
    is_closed = SyncedField("closed", rules=[NotNullRule(), BooleanRule()])
    is_pinned = SyncedField("pinned", rules=[NotNullRule(), BooleanRule()])
    is_starred = SyncedField("starred", rules=[NotNullRule(), BooleanRule()])
    organization = SyncedField(
        "id_organization",
        converter=reference("Organization"),
        serializer=entity_id,
        rules=[EntityRule("Organization", nullable=True)],
    )
    permission_level = SyncedField(
        "prefs.permission_level",
        json_name="prefs/permissionLevel",
        converter=enumeration(BoardPermissionLevel),
        serializer=enum_value,
        rules=[EnumerationRule(BoardPermissionLevel)],
    )
    url = SyncedField(readonly=True)
    short_url = SyncedField(readonly=True)
    last_activity = SyncedField("date_last_activity", readonly=True)
    last_viewed = SyncedField("date_last_view", readonly=True)

    def __init__(
        self,
        entity_id: str,
        json: Optional[Mapping[str, Any]] = None,
        *,
        client: Optional[TrelloClient] = None,
    ):
        super().__init__(entity_id, json, client=client)
        self.lists = ListCollection(
            self, lambda params: self._api.get_lists(self.id, params)
        )
        self.cards = ReadOnlyCardCollection(
            self, lambda params: self._api.get_cards(self.id, params)
        )
        self.members = ReadOnlyMemberCollection(
            self, lambda params: self._api.get_members(self.id, params)
        )

    async def _fetch(self) -> Dict[str, Any]:
        return await self._api.get_board(self.id, fields=self._query_fields())

    async def _submit(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._api.update_board(self.id, payload)

    async def _remove(self) -> None:
        await self._api.delete_board(self.id)
