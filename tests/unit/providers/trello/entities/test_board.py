"""
Board 实体测试模块

测试覆盖:
1. 身份缓存 - 同一个 ID 只对应一个对象
2. 局部合并与懒加载
3. update - 校验、payload、只读字段
4. delete - 删除后不可再使用
5. 引用字段、事件、ID 变化
"""

import logging
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from trello_sync.core.cache import entity_cache
from trello_sync.core.errors import EntityDeletedError, TrelloApiError, TrelloValidationError
from trello_sync.providers.trello.entities import (
    Board,
    BoardPermissionLevel,
    Organization,
)

from tests.unit.providers.trello.api.conftest import (
    create_error_response,
    create_mock_response,
)

BOARD_ID = "5a1b2c3d4e5f6a7b8c9d0e1f"


class TestBoardIdentity:
    def test_get_returns_same_instance(self, mock_client):
        """同一个 ID 返回同一个对象"""
        first = Board.get(BOARD_ID, client=mock_client)
        second = Board.get(BOARD_ID, client=mock_client)

        assert first is second

    def test_from_json_merges_into_existing(self, mock_client):
        board = Board.get(BOARD_ID, client=mock_client)
        same = Board.from_json({"id": BOARD_ID, "name": "Roadmap"}, client=mock_client)

        assert same is board
        assert board.name == "Roadmap"

    def test_from_json_requires_id(self, mock_client):
        with pytest.raises(Exception, match="id"):
            Board.from_json({"name": "no id"}, client=mock_client)

    def test_creation_date(self, mock_client):
        board = Board.get(BOARD_ID, client=mock_client)
        assert board.creation_date == datetime.fromtimestamp(0x5A1B2C3D, tz=timezone.utc)

    def test_str_and_repr(self, mock_client):
        board = Board.get(BOARD_ID, client=mock_client)
        assert str(board) == BOARD_ID

        board.merge({"name": "Roadmap"})
        assert str(board) == "Roadmap"
        assert repr(board) == f"<Board id={BOARD_ID!r}>"

    def test_short_link_resolves_to_real_id(self, mock_client):
        """短链接同步后替换为真实 ID，缓存键同步更新"""
        board = Board.get("AbCdEf12", client=mock_client)
        board.merge({"id": BOARD_ID, "name": "Roadmap"})

        assert board.id == BOARD_ID
        assert Board.get(BOARD_ID, client=mock_client) is board
        assert "AbCdEf12" not in entity_cache


class TestBoardSync:
    def test_partial_merge_keeps_other_fields(self, mock_client):
        board = Board.from_json(
            {"id": BOARD_ID, "name": "Roadmap", "desc": "Q3"}, client=mock_client
        )
        board.merge({"id": BOARD_ID, "closed": True})

        assert board.name == "Roadmap"
        assert board.description == "Q3"
        assert board.is_closed is True

    @pytest.mark.asyncio
    async def test_fetch_loads_field(self, mock_client):
        """未加载的字段触发一次 GET"""
        mock_client.get.return_value = create_mock_response(
            {"id": BOARD_ID, "name": "Roadmap", "prefs": {"permissionLevel": "org"}}
        )
        board = Board.get(BOARD_ID, client=mock_client)

        assert await board.fetch("name") == "Roadmap"
        assert await board.fetch("permission_level") is BoardPermissionLevel.ORGANIZATION

        mock_client.get.assert_awaited_once()
        call = mock_client.get.call_args
        assert call.args == (f"/boards/{BOARD_ID}",)
        fields = call.kwargs["params"]["fields"].split(",")
        assert "name" in fields
        assert "idOrganization" in fields
        assert "prefs" in fields

    @pytest.mark.asyncio
    async def test_fetch_unknown_field(self, mock_client):
        board = Board.get(BOARD_ID, client=mock_client)
        with pytest.raises(AttributeError):
            await board.fetch("nope")

    @pytest.mark.asyncio
    async def test_refresh_force(self, mock_client):
        mock_client.get.return_value = create_mock_response({"id": BOARD_ID, "name": "A"})
        board = Board.get(BOARD_ID, client=mock_client)

        await board.refresh()
        mock_client.get.return_value = create_mock_response({"id": BOARD_ID, "name": "B"})
        assert await board.refresh() == []
        changed = await board.refresh(force=True)

        assert changed == ["name"]
        assert board.name == "B"
        assert mock_client.get.await_count == 2

    @pytest.mark.asyncio
    async def test_refresh_api_error(self, mock_client):
        mock_client.get.return_value = create_error_response(404, "board not found")
        board = Board.get(BOARD_ID, client=mock_client)

        with pytest.raises(TrelloApiError):
            await board.refresh()

    def test_unknown_permission_level(self, mock_client):
        board = Board.from_json(
            {"id": BOARD_ID, "prefs": {"permissionLevel": "enterprise"}}, client=mock_client
        )
        assert board.permission_level is BoardPermissionLevel.UNKNOWN

    def test_organization_reference_uses_identity_cache(self, mock_client):
        board = Board.from_json(
            {"id": BOARD_ID, "idOrganization": "o1"}, client=mock_client
        )

        org = board.organization
        assert isinstance(org, Organization)
        assert org is Organization.get("o1")
        assert board.organization is org

    def test_direct_assignment_rejected(self, mock_client):
        board = Board.get(BOARD_ID, client=mock_client)
        with pytest.raises(AttributeError):
            board.name = "x"


class TestBoardUpdate:
    @pytest.mark.asyncio
    async def test_update_sends_partial_payload(self, mock_client):
        mock_client.put.return_value = create_mock_response({"id": BOARD_ID, "name": "New"})
        board = Board.from_json(
            {"id": BOARD_ID, "name": "Old", "desc": "keep"}, client=mock_client
        )

        changed = await board.update(name="New")

        assert changed == ["name"]
        assert board.name == "New"
        assert board.description == "keep"
        mock_client.put.assert_awaited_once_with(
            f"/boards/{BOARD_ID}", json={"name": "New"}, params=None
        )

    @pytest.mark.asyncio
    async def test_update_nested_preference(self, mock_client):
        mock_client.put.return_value = create_mock_response({})
        board = Board.from_json(
            {"id": BOARD_ID, "prefs": {"permissionLevel": "private", "background": "blue"}},
            client=mock_client,
        )

        await board.update(permission_level=BoardPermissionLevel.PUBLIC)

        mock_client.put.assert_awaited_once_with(
            f"/boards/{BOARD_ID}", json={"prefs/permissionLevel": "public"}, params=None
        )
        assert board.permission_level is BoardPermissionLevel.PUBLIC
        assert board.snapshot()["prefs"]["background"] == "blue"

    @pytest.mark.asyncio
    async def test_update_organization_reference(self, mock_client):
        mock_client.put.return_value = create_mock_response({})
        board = Board.get(BOARD_ID, client=mock_client)
        org = Organization.get("o2", client=mock_client)

        await board.update(organization=org)

        assert mock_client.put.call_args.kwargs["json"] == {"idOrganization": "o2"}
        assert board.organization is org

    @pytest.mark.asyncio
    async def test_update_multiple_fields_single_request(self, mock_client):
        mock_client.put.return_value = create_mock_response({})
        board = Board.get(BOARD_ID, client=mock_client)

        changed = await board.update(name="N", is_closed=True)

        assert set(changed) == {"name", "is_closed"}
        mock_client.put.assert_awaited_once_with(
            f"/boards/{BOARD_ID}", json={"name": "N", "closed": True}, params=None
        )

    @pytest.mark.asyncio
    async def test_update_validation_error(self, mock_client):
        """校验失败时不发请求"""
        board = Board.from_json({"id": BOARD_ID, "name": "Old"}, client=mock_client)

        with pytest.raises(TrelloValidationError):
            await board.update(name="   ")

        mock_client.put.assert_not_awaited()
        assert board.name == "Old"

    @pytest.mark.asyncio
    async def test_update_invalid_enum(self, mock_client):
        board = Board.get(BOARD_ID, client=mock_client)
        with pytest.raises(TrelloValidationError):
            await board.update(permission_level=BoardPermissionLevel.UNKNOWN)

    @pytest.mark.asyncio
    async def test_update_readonly_field(self, mock_client):
        board = Board.get(BOARD_ID, client=mock_client)
        with pytest.raises(AttributeError, match="只读"):
            await board.update(url="https://trello.com/b/x")

    @pytest.mark.asyncio
    async def test_update_nothing(self, mock_client):
        board = Board.get(BOARD_ID, client=mock_client)
        assert await board.update() == []
        mock_client.put.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_failure_keeps_local_value(self, mock_client):
        mock_client.put.return_value = create_error_response(400, "invalid value for name", "PUT")
        board = Board.from_json({"id": BOARD_ID, "name": "Old"}, client=mock_client)

        with pytest.raises(TrelloApiError):
            await board.update(name="New")

        assert board.name == "Old"

    @pytest.mark.asyncio
    async def test_subscribers_notified(self, mock_client):
        mock_client.put.return_value = create_mock_response({})
        board = Board.get(BOARD_ID, client=mock_client)
        callback = MagicMock()
        board.subscribe(callback)

        await board.update(description="d")

        callback.assert_called_once_with(board, ["description"])

        board.unsubscribe(callback)
        board.merge({"name": "x"})
        callback.assert_called_once()


class TestBoardDelete:
    @pytest.mark.asyncio
    async def test_delete(self, mock_client):
        mock_client.delete.return_value = create_mock_response(None)
        board = Board.get(BOARD_ID, client=mock_client)

        await board.delete()

        mock_client.delete.assert_awaited_once_with(f"/boards/{BOARD_ID}", params=None)
        assert board.is_deleted
        assert BOARD_ID not in entity_cache

    @pytest.mark.asyncio
    async def test_use_after_delete(self, mock_client):
        mock_client.delete.return_value = create_mock_response(None)
        board = Board.get(BOARD_ID, client=mock_client)
        await board.delete()

        with pytest.raises(EntityDeletedError):
            await board.fetch("name")
        with pytest.raises(EntityDeletedError):
            await board.update(name="x")

    @pytest.mark.asyncio
    async def test_get_after_delete_returns_new_object(self, mock_client):
        mock_client.delete.return_value = create_mock_response(None)
        board = Board.get(BOARD_ID, client=mock_client)
        await board.delete()

        assert Board.get(BOARD_ID, client=mock_client) is not board


class TestBoardUpdateTypes:
    @pytest.mark.asyncio
    async def test_non_bool_flag_rejected_before_request(self, mock_client):
        """bool 字段传入字符串时不发请求，本地值不变"""
        board = Board.from_json({"id": BOARD_ID, "closed": False}, client=mock_client)

        with pytest.raises(TrelloValidationError):
            await board.update(is_closed="not-a-bool")

        mock_client.put.assert_not_awaited()
        assert board.is_closed is False

    @pytest.mark.asyncio
    async def test_schema_mismatch_rejected_before_request(self, mock_client):
        """字段规则通过但不符合 schema 的值同样在本地拒绝"""
        board = Board.from_json({"id": BOARD_ID, "desc": "keep"}, client=mock_client)

        with pytest.raises(TrelloValidationError) as exc_info:
            await board.update(description=123)

        mock_client.put.assert_not_awaited()
        assert board.description == "keep"
        assert any("desc" in error for error in exc_info.value.errors)


class TestBoardDownloadedFields:
    @pytest.mark.asyncio
    async def test_fetch_requests_selected_fields_only(self, mock_client, monkeypatch):
        monkeypatch.setattr(Board, "downloaded_fields", frozenset({"name"}))
        mock_client.get.return_value = create_mock_response({"id": BOARD_ID, "name": "Roadmap"})
        board = Board.get(BOARD_ID, client=mock_client)

        await board.refresh()

        mock_client.get.assert_awaited_once_with(
            f"/boards/{BOARD_ID}", params={"fields": "name"}
        )

    @pytest.mark.asyncio
    async def test_nested_field_requests_root(self, mock_client, monkeypatch):
        monkeypatch.setattr(
            Board, "downloaded_fields", frozenset({"permission_level", "organization"})
        )
        mock_client.get.return_value = create_mock_response({"id": BOARD_ID})
        board = Board.get(BOARD_ID, client=mock_client)

        await board.refresh()

        params = mock_client.get.call_args.kwargs["params"]
        assert params == {"fields": "idOrganization,prefs"}


class TestBoardCacheDisabled:
    def test_get_returns_new_objects(self, mock_client, monkeypatch):
        """关闭身份缓存时每次 get 都构造新对象"""
        monkeypatch.setattr(entity_cache, "enabled", False)

        first = Board.get(BOARD_ID, client=mock_client)
        second = Board.get(BOARD_ID, client=mock_client)

        assert first is not second
        assert len(entity_cache) == 0

    def test_references_not_cached(self, mock_client, monkeypatch):
        monkeypatch.setattr(entity_cache, "enabled", False)
        board = Board.from_json({"id": BOARD_ID, "idOrganization": "o1"}, client=mock_client)

        first = board.organization
        second = board.organization

        assert first.id == second.id == "o1"
        assert first is not second


class TestBoardIdCollision:
    @pytest.mark.asyncio
    async def test_reindexed_entity_takes_slot(self, mock_client):
        """ID 变化与已缓存实体冲突时，新对象占用缓存，旧对象仍可使用"""
        existing = Board.from_json({"id": BOARD_ID, "name": "Old copy"}, client=mock_client)
        resolved = Board.get("AbCdEf12", client=mock_client)

        resolved.merge({"id": BOARD_ID, "name": "Roadmap"})

        assert Board.get(BOARD_ID, client=mock_client) is resolved
        assert existing.name == "Old copy"

        mock_client.put.return_value = create_mock_response({"id": BOARD_ID, "name": "Renamed"})
        await existing.update(name="Renamed")

        assert existing.name == "Renamed"
        mock_client.put.assert_awaited_once_with(
            f"/boards/{BOARD_ID}", json={"name": "Renamed"}, params=None
        )


class TestUnknownPermissionLevel:
    def test_warning_logged_once(self, mock_client, caplog):
        """未识别的权限值重复读取只告警一次"""
        board = Board.from_json(
            {"id": BOARD_ID, "prefs": {"permissionLevel": "enterprise_only"}},
            client=mock_client,
        )

        with caplog.at_level(logging.WARNING, logger="trello_sync.providers.trello.entities.enums"):
            for _ in range(3):
                assert board.permission_level is BoardPermissionLevel.UNKNOWN

        warnings = [r for r in caplog.records if "enterprise_only" in r.getMessage()]
        assert len(warnings) == 1
