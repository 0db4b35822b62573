from typing import Any, Dict, Mapping, Optional, Tuple

from trello_sync.core.client import TrelloClient
from trello_sync.core.fields import SyncedField, reference
from trello_sync.providers.trello.api import AttachmentAPI
from trello_sync.schemas.trello import JsonAttachment, JsonImagePreview

from .base import TrelloEntity


def _previews(entity: Any, raw: Any) -> Tuple[JsonImagePreview, ...]:
    return tuple(JsonImagePreview.model_validate(p) for p in raw)


class Attachment(TrelloEntity):
    """卡片附件，字段只读，只支持删除"""

    schema = JsonAttachment
    api_class = AttachmentAPI
    supports_update = False
    supports_delete = True

    bytes = SyncedField(readonly=True)
    date = SyncedField(readonly=True)
    is_upload = SyncedField(readonly=True)
    member = SyncedField("id_member", converter=reference("Member"), readonly=True)
    mime_type = SyncedField(readonly=True)
    name = SyncedField(readonly=True)
    previews = SyncedField(converter=_previews, readonly=True)
    url = SyncedField(readonly=True)

    def __init__(
        self,
        entity_id: str,
        json: Optional[Mapping[str, Any]] = None,
        *,
        card_id: str,
        client: Optional[TrelloClient] = None,
    ):
        self.card_id = card_id
        super().__init__(entity_id, json, client=client)

    async def _fetch(self) -> Dict[str, Any]:
        return await self._api.get_attachment(
            self.card_id, self.id, fields=self._query_fields()
        )

    async def _remove(self) -> None:
        await self._api.delete_attachment(self.card_id, self.id)
