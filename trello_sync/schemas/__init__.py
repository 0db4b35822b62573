from .trello import (
    JsonAttachment,
    JsonBoard,
    JsonBoardPrefs,
    JsonCard,
    JsonImagePreview,
    JsonList,
    JsonMember,
    JsonOrganization,
    JsonOrganizationPrefs,
    TrelloModel,
)

__all__ = [
    "TrelloModel",
    "JsonAttachment",
    "JsonBoard",
    "JsonBoardPrefs",
    "JsonCard",
    "JsonImagePreview",
    "JsonList",
    "JsonMember",
    "JsonOrganization",
    "JsonOrganizationPrefs",
]
