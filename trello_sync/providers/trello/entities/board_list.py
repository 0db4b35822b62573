from typing import Any, Dict, Mapping, Optional

from trello_sync.core.client import TrelloClient
from trello_sync.core.fields import SyncedField, entity_id, reference
from trello_sync.core.validation import (
    BooleanRule,
    EntityRule,
    NotNullOrWhiteSpaceRule,
    NotNullRule,
    PositionRule,
)
from trello_sync.providers.trello.api import ListAPI
from trello_sync.schemas.trello import JsonList

from .base import TrelloEntity
from .collections import CardCollection


class BoardList(TrelloEntity):
    """看板中的列表，Trello 不支持删除列表，只能归档 (is_closed)"""

    schema = JsonList
    api_class = ListAPI

    name = SyncedField(rules=[NotNullOrWhiteSpaceRule()])
    is_closed = SyncedField("closed", rules=[NotNullRule(), BooleanRule()])
    board = SyncedField(
        "id_board",
        converter=reference("Board"),
        serializer=entity_id,
        rules=[EntityRule("Board")],
    )
    position = SyncedField("pos", rules=[PositionRule()])
    is_subscribed = SyncedField("subscribed", rules=[NotNullRule(), BooleanRule()])

    def __init__(
        self,
        entity_id: str,
        json: Optional[Mapping[str, Any]] = None,
        *,
        client: Optional[TrelloClient] = None,
    ):
        super().__init__(entity_id, json, client=client)
        self.cards = CardCollection(
            self, lambda params: self._api.get_cards(self.id, params)
        )

    async def _fetch(self) -> Dict[str, Any]:
        return await self._api.get_list(self.id, fields=self._query_fields())

    async def _submit(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._api.update_list(self.id, payload)
