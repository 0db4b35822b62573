from datetime import datetime, timezone

import pytest

from trello_sync.core.fields import SyncedField
from trello_sync.core.utils import extract_creation_date, mask_secret
from trello_sync.providers.trello.entities import Board, BoardPermissionLevel, Card


class TestSyncedField:
    def test_json_name_defaults_to_alias(self):
        """提交键默认取 schema alias"""
        assert Card._fields["is_complete"].json_name == "dueComplete"
        assert Card._fields["name"].json_name == "name"
        assert Board._fields["permission_level"].json_name == "prefs/permissionLevel"

    def test_class_access_returns_descriptor(self):
        assert isinstance(Board.name, SyncedField)

    def test_get_reads_local_value(self):
        board = Board("b1", {"name": "Board", "prefs": {"permissionLevel": "org"}})

        assert board.name == "Board"
        assert board.permission_level is BoardPermissionLevel.ORGANIZATION

    def test_get_unloaded_is_none(self):
        board = Board("b1")
        assert board.description is None
        assert board.permission_level is None

    def test_set_raises(self):
        board = Board("b1")
        with pytest.raises(AttributeError, match="update"):
            board.name = "x"

    def test_serialize_datetime(self):
        field = Card._fields["due_date"]
        value = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

        assert field.serialize(value) == "2024-01-02T03:04:05+00:00"
        assert field.serialize(None) is None

    def test_serialize_entity_reference(self):
        field = Card._fields["board"]
        assert field.serialize(Board("b1")) == "b1"

    def test_to_changes_nested(self):
        field = Board._fields["permission_level"]
        changes = field.to_changes(BoardPermissionLevel.PUBLIC)

        assert changes == {"prefs": {"permission_level": "public"}}


class TestUtils:
    def test_extract_creation_date(self):
        created = extract_creation_date("5a1b2c3d4e5f6a7b8c9d0e1f")

        assert created == datetime.fromtimestamp(0x5A1B2C3D, tz=timezone.utc)

    @pytest.mark.parametrize("value", [None, "", "short", "zzzzzzzz4e5f6a7b8c9d0e1f"])
    def test_extract_creation_date_invalid(self, value):
        assert extract_creation_date(value) is None

    def test_mask_secret(self):
        assert mask_secret("abcdefgh") == "abcd***"
        assert mask_secret("abc") == "***"
        assert mask_secret("") == "***"
