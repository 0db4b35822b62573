"""
CardAPI / AttachmentAPI 测试模块
"""

import pytest

from trello_sync.core.errors import TrelloApiError
from trello_sync.providers.trello.api import AttachmentAPI, CardAPI

from tests.unit.providers.trello.api.conftest import (
    create_error_response,
    create_mock_response,
)


class TestCardAPI:
    @pytest.mark.asyncio
    async def test_get_card(self, mock_client):
        mock_client.get.return_value = create_mock_response({"id": "c1", "name": "Card"})
        api = CardAPI(client=mock_client)

        result = await api.get_card("c1", fields=["name", "idList"])

        assert result["name"] == "Card"
        mock_client.get.assert_awaited_once_with(
            "/cards/c1", params={"fields": "idList,name"}
        )

    @pytest.mark.asyncio
    async def test_get_card_not_found(self, mock_client):
        """测试卡片不存在"""
        mock_client.get.return_value = create_error_response(404, "The requested resource was not found.")
        api = CardAPI(client=mock_client)

        with pytest.raises(TrelloApiError) as exc_info:
            await api.get_card("missing")

        assert exc_info.value.status_code == 404
        assert exc_info.value.path == "/cards/missing"

    @pytest.mark.asyncio
    async def test_create_card(self, mock_client):
        mock_client.post.return_value = create_mock_response({"id": "c2"})
        api = CardAPI(client=mock_client)

        await api.create_card("Task", "l1", description="details", position=10.5)

        mock_client.post.assert_awaited_once_with(
            "/cards",
            json={"name": "Task", "idList": "l1", "desc": "details", "pos": 10.5},
            params=None,
        )

    @pytest.mark.asyncio
    async def test_create_card_minimal(self, mock_client):
        mock_client.post.return_value = create_mock_response({"id": "c2"})
        api = CardAPI(client=mock_client)

        await api.create_card("Task", "l1")

        assert mock_client.post.call_args.kwargs["json"] == {"name": "Task", "idList": "l1"}

    @pytest.mark.asyncio
    async def test_update_card(self, mock_client):
        mock_client.put.return_value = create_mock_response({"id": "c1", "dueComplete": True})
        api = CardAPI(client=mock_client)

        result = await api.update_card("c1", {"dueComplete": True})

        assert result["dueComplete"] is True
        mock_client.put.assert_awaited_once_with(
            "/cards/c1", json={"dueComplete": True}, params=None
        )

    @pytest.mark.asyncio
    async def test_delete_card(self, mock_client):
        mock_client.delete.return_value = create_mock_response(None)
        api = CardAPI(client=mock_client)

        await api.delete_card("c1")

        mock_client.delete.assert_awaited_once_with("/cards/c1", params=None)


class TestAttachmentAPI:
    @pytest.mark.asyncio
    async def test_get_attachment(self, mock_client):
        mock_client.get.return_value = create_mock_response({"id": "a1", "name": "design.pdf"})
        api = AttachmentAPI(client=mock_client)

        result = await api.get_attachment("c1", "a1", fields=["name"])

        assert result["name"] == "design.pdf"
        mock_client.get.assert_awaited_once_with(
            "/cards/c1/attachments/a1", params={"fields": "name"}
        )

    @pytest.mark.asyncio
    async def test_add_attachment(self, mock_client):
        mock_client.post.return_value = create_mock_response({"id": "a2"})
        api = AttachmentAPI(client=mock_client)

        await api.add_attachment("c1", "https://example.com/f.png", name="f", mime_type="image/png")

        mock_client.post.assert_awaited_once_with(
            "/cards/c1/attachments",
            json={"url": "https://example.com/f.png", "name": "f", "mimeType": "image/png"},
            params=None,
        )

    @pytest.mark.asyncio
    async def test_delete_attachment(self, mock_client):
        mock_client.delete.return_value = create_mock_response(None)
        api = AttachmentAPI(client=mock_client)

        await api.delete_attachment("c1", "a1")

        mock_client.delete.assert_awaited_once_with("/cards/c1/attachments/a1", params=None)
