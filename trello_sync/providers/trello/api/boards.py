"""
BoardAPI - 看板相关原子接口

对应 Trello REST API:
- GET    /boards/{id}
- POST   /boards
- PUT    /boards/{id}
- DELETE /boards/{id}
- GET    /boards/{id}/lists
- GET    /boards/{id}/cards
- GET    /boards/{id}/members
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from .base import BaseAPI, fields_param

logger = logging.getLogger(__name__)


class BoardAPI(BaseAPI):
    """Trello 看板 API 封装"""

    async def get_board(
        self, board_id: str, fields: Optional[Iterable[str]] = None
    ) -> Dict[str, Any]:
        """
        获取看板详情

        API: GET /boards/{id}

        Args:
            board_id: 看板 ID 或短链接
            fields: 需要返回的字段 (JSON 键名)，不传则返回默认字段

        Returns:
            看板 JSON

        Raises:
            TrelloApiError: API 调用失败
        """
        logger.debug("Getting board: board_id=%s", board_id)
        return await self._request(
            "GET", f"/boards/{board_id}", params={"fields": fields_param(fields)}
        )

    async def create_board(
        self,
        name: str,
        organization_id: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        创建看板

        API: POST /boards

        Args:
            name: 看板名称
            organization_id: 所属组织 ID (可选)
            description: 描述 (可选)

        Returns:
            新建看板 JSON
        """
        payload: Dict[str, Any] = {"name": name, "defaultLists": False}
        if organization_id:
            payload["idOrganization"] = organization_id
        if description:
            payload["desc"] = description

        logger.info("Creating board: name=%s, organization_id=%s", name, organization_id)
        data = await self._request("POST", "/boards", json=payload)
        logger.info("Board created: id=%s", data.get("id"))
        return data

    async def update_board(self, board_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        更新看板

        API: PUT /boards/{id}

        Args:
            board_id: 看板 ID
            payload: 需要修改的字段，例如 {"name": "...", "prefs/permissionLevel": "org"}

        Returns:
            更新后的看板 JSON
        """
        logger.debug("Updating board: board_id=%s, payload=%s", board_id, payload)
        return await self._request("PUT", f"/boards/{board_id}", json=payload)

    async def delete_board(self, board_id: str) -> None:
        """
        删除看板（不可恢复）

        API: DELETE /boards/{id}
        """
        logger.info("Deleting board: board_id=%s", board_id)
        await self._request("DELETE", f"/boards/{board_id}")

    async def get_lists(
        self, board_id: str, params: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """
        获取看板下的列表

        API: GET /boards/{id}/lists

        Args:
            board_id: 看板 ID
            params: 额外查询参数 (limit, fields)
        """
        lists = await self._request("GET", f"/boards/{board_id}/lists", params=params)
        logger.info("Retrieved %d lists for board %s", len(lists), board_id)
        return lists

    async def get_cards(
        self, board_id: str, params: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """
        获取看板下的卡片

        API: GET /boards/{id}/cards
        """
        cards = await self._request("GET", f"/boards/{board_id}/cards", params=params)
        logger.info("Retrieved %d cards for board %s", len(cards), board_id)
        return cards

    async def get_members(
        self, board_id: str, params: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """
        获取看板成员

        API: GET /boards/{id}/members
        """
        members = await self._request(
            "GET", f"/boards/{board_id}/members", params=params
        )
        logger.info("Retrieved %d members for board %s", len(members), board_id)
        return members
