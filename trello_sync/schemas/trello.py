from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class TrelloModel(BaseModel):
    # 字段全部可选，局部数据也能通过校验；未知字段忽略以兼容新版本 API
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class JsonImagePreview(TrelloModel):
    id: Optional[str] = None
    url: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    bytes: Optional[int] = None
    scaled: Optional[bool] = None


class JsonAttachment(TrelloModel):
    id: Optional[str] = None
    bytes: Optional[int] = None
    date: Optional[datetime] = None
    id_member: Optional[str] = Field(default=None, alias="idMember")
    is_upload: Optional[bool] = Field(default=None, alias="isUpload")
    mime_type: Optional[str] = Field(default=None, alias="mimeType")
    name: Optional[str] = None
    previews: Optional[List[JsonImagePreview]] = None
    url: Optional[str] = None


class JsonBoardPrefs(TrelloModel):
    permission_level: Optional[str] = Field(default=None, alias="permissionLevel")
    background: Optional[str] = None


class JsonBoard(TrelloModel):
    id: Optional[str] = None
    name: Optional[str] = None
    desc: Optional[str] = None
    closed: Optional[bool] = None
    id_organization: Optional[str] = Field(default=None, alias="idOrganization")
    pinned: Optional[bool] = None
    starred: Optional[bool] = None
    url: Optional[str] = None
    short_url: Optional[str] = Field(default=None, alias="shortUrl")
    prefs: Optional[JsonBoardPrefs] = None
    date_last_activity: Optional[datetime] = Field(
        default=None, alias="dateLastActivity"
    )
    date_last_view: Optional[datetime] = Field(default=None, alias="dateLastView")


class JsonList(TrelloModel):
    id: Optional[str] = None
    name: Optional[str] = None
    closed: Optional[bool] = None
    id_board: Optional[str] = Field(default=None, alias="idBoard")
    pos: Optional[Union[float, str]] = None  # 提交时可以是 "top" / "bottom"
    subscribed: Optional[bool] = None


class JsonCard(TrelloModel):
    id: Optional[str] = None
    name: Optional[str] = None
    desc: Optional[str] = None
    closed: Optional[bool] = None
    id_board: Optional[str] = Field(default=None, alias="idBoard")
    id_list: Optional[str] = Field(default=None, alias="idList")
    id_members: Optional[List[str]] = Field(default=None, alias="idMembers")
    due: Optional[datetime] = None
    due_complete: Optional[bool] = Field(default=None, alias="dueComplete")
    pos: Optional[Union[float, str]] = None  # 提交时可以是 "top" / "bottom"
    url: Optional[str] = None
    short_url: Optional[str] = Field(default=None, alias="shortUrl")
    id_short: Optional[int] = Field(default=None, alias="idShort")
    date_last_activity: Optional[datetime] = Field(
        default=None, alias="dateLastActivity"
    )


class JsonMember(TrelloModel):
    id: Optional[str] = None
    username: Optional[str] = None
    full_name: Optional[str] = Field(default=None, alias="fullName")
    initials: Optional[str] = None
    avatar_hash: Optional[str] = Field(default=None, alias="avatarHash")
    bio: Optional[str] = None
    url: Optional[str] = None
    confirmed: Optional[bool] = None
    member_type: Optional[str] = Field(default=None, alias="memberType")
    status: Optional[str] = None


class JsonOrganizationPrefs(TrelloModel):
    permission_level: Optional[str] = Field(default=None, alias="permissionLevel")


class JsonOrganization(TrelloModel):
    id: Optional[str] = None
    name: Optional[str] = None
    display_name: Optional[str] = Field(default=None, alias="displayName")
    desc: Optional[str] = None
    url: Optional[str] = None
    website: Optional[str] = None
    prefs: Optional[JsonOrganizationPrefs] = None
