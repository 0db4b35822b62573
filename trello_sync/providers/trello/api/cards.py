"""
CardAPI - 卡片相关原子接口

对应 Trello REST API:
- GET    /cards/{id}
- POST   /cards
- PUT    /cards/{id}
- DELETE /cards/{id}
- GET    /cards/{id}/members
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from .base import BaseAPI, fields_param

logger = logging.getLogger(__name__)


class CardAPI(BaseAPI):
    """Trello 卡片 API 封装"""

    async def get_card(
        self, card_id: str, fields: Optional[Iterable[str]] = None
    ) -> Dict[str, Any]:
        """
        获取卡片详情

        API: GET /cards/{id}

        Args:
            card_id: 卡片 ID 或短链接
            fields: 需要返回的字段 (JSON 键名)

        Returns:
            卡片 JSON

        Raises:
            TrelloApiError: API 调用失败（如卡片不存在返回 404）
        """
        logger.debug("Getting card: card_id=%s", card_id)
        return await self._request(
            "GET", f"/cards/{card_id}", params={"fields": fields_param(fields)}
        )

    async def create_card(
        self,
        name: str,
        list_id: str,
        description: Optional[str] = None,
        position: Optional[Union[float, str]] = None,
    ) -> Dict[str, Any]:
        """
        在列表中创建卡片

        API: POST /cards

        Args:
            name: 卡片标题
            list_id: 所属列表 ID
            description: 描述 (可选)
            position: 位置，正数或 "top" / "bottom" (可选)

        Returns:
            新建卡片 JSON
        """
        payload: Dict[str, Any] = {"name": name, "idList": list_id}
        if description:
            payload["desc"] = description
        if position is not None:
            payload["pos"] = position

        logger.info("Creating card: name=%s, list_id=%s", name, list_id)
        data = await self._request("POST", "/cards", json=payload)
        logger.info("Card created: id=%s", data.get("id"))
        return data

    async def update_card(self, card_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        更新卡片

        API: PUT /cards/{id}

        Args:
            card_id: 卡片 ID
            payload: 需要修改的字段，例如 {"name": "...", "idList": "..."}

        Returns:
            更新后的卡片 JSON
        """
        logger.debug("Updating card: card_id=%s, payload=%s", card_id, payload)
        return await self._request("PUT", f"/cards/{card_id}", json=payload)

    async def delete_card(self, card_id: str) -> None:
        """
        删除卡片（不可恢复）

        API: DELETE /cards/{id}
        """
        logger.info("Deleting card: card_id=%s", card_id)
        await self._request("DELETE", f"/cards/{card_id}")

    async def get_members(
        self, card_id: str, params: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """
        获取卡片成员

        API: GET /cards/{id}/members
        """
        members = await self._request("GET", f"/cards/{card_id}/members", params=params)
        logger.info("Retrieved %d members for card %s", len(members), card_id)
        return members
