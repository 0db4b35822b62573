from typing import Any, Dict, Mapping, Optional

from trello_sync.core.client import TrelloClient
from trello_sync.core.fields import SyncedField, entity_id, reference
from trello_sync.core.validation import (
    BooleanRule,
    DateTimeRule,
    EntityRule,
    MaxLengthRule,
    NotNullOrWhiteSpaceRule,
    NotNullRule,
    PositionRule,
)
from trello_sync.providers.trello.api import AttachmentAPI, CardAPI
from trello_sync.schemas.trello import JsonCard

from .base import TrelloEntity
from .collections import AttachmentCollection, ReadOnlyMemberCollection


class Card(TrelloEntity):
    schema = JsonCard
    api_class = CardAPI
    supports_delete = True

    name = SyncedField(rules=[NotNullOrWhiteSpaceRule(), MaxLengthRule(16384)])
    description = SyncedField("desc", rules=[MaxLengthRule(16384)])
    is_closed = SyncedField("closed", rules=[NotNullRule(), BooleanRule()])
    board = SyncedField(
        "id_board",
        converter=reference("Board"),
        serializer=entity_id,
        rules=[EntityRule("Board")],
    )
    list = SyncedField(
        "id_list",
        converter=reference("BoardList"),
        serializer=entity_id,
        rules=[EntityRule("BoardList")],
    )
    due_date = SyncedField("due", rules=[DateTimeRule()])
    is_complete = SyncedField("due_complete", rules=[NotNullRule(), BooleanRule()])
    position = SyncedField("pos", rules=[PositionRule()])
    url = SyncedField(readonly=True)
    short_url = SyncedField(readonly=True)
    short_id = SyncedField("id_short", readonly=True)
    last_activity = SyncedField("date_last_activity", readonly=True)

    def __init__(
        self,
        entity_id: str,
        json: Optional[Mapping[str, Any]] = None,
        *,
        client: Optional[TrelloClient] = None,
    ):
        super().__init__(entity_id, json, client=client)
        self.attachments = AttachmentCollection(
            self,
            lambda params: AttachmentAPI(self._client).list_attachments(self.id, params),
        )
        self.members = ReadOnlyMemberCollection(
            self, lambda params: self._api.get_members(self.id, params)
        )

    async def _fetch(self) -> Dict[str, Any]:
        return await self._api.get_card(self.id, fields=self._query_fields())

    async def _submit(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._api.update_card(self.id, payload)

    async def _remove(self) -> None:
        await self._api.delete_card(self.id)
