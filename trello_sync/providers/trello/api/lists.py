"""
ListAPI - 列表相关原子接口

对应 Trello REST API:
- GET  /lists/{id}
- POST /lists
- PUT  /lists/{id}
- GET  /lists/{id}/cards
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from .base import BaseAPI, fields_param

logger = logging.getLogger(__name__)


class ListAPI(BaseAPI):
    """Trello 列表 API 封装"""

    async def get_list(
        self, list_id: str, fields: Optional[Iterable[str]] = None
    ) -> Dict[str, Any]:
        """
        获取列表详情

        API: GET /lists/{id}
        """
        logger.debug("Getting list: list_id=%s", list_id)
        return await self._request(
            "GET", f"/lists/{list_id}", params={"fields": fields_param(fields)}
        )

    async def create_list(
        self,
        name: str,
        board_id: str,
        position: Optional[Union[float, str]] = None,
    ) -> Dict[str, Any]:
        """
        在看板中创建列表

        API: POST /lists

        Args:
            name: 列表名称
            board_id: 所属看板 ID
            position: 位置，正数或 "top" / "bottom"

        Returns:
            新建列表 JSON
        """
        payload: Dict[str, Any] = {"name": name, "idBoard": board_id}
        if position is not None:
            payload["pos"] = position

        logger.info("Creating list: name=%s, board_id=%s", name, board_id)
        data = await self._request("POST", "/lists", json=payload)
        logger.info("List created: id=%s", data.get("id"))
        return data

    async def update_list(self, list_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        更新列表（重命名、归档、移动到其他看板等）

        API: PUT /lists/{id}
        """
        logger.debug("Updating list: list_id=%s, payload=%s", list_id, payload)
        return await self._request("PUT", f"/lists/{list_id}", json=payload)

    async def get_cards(
        self, list_id: str, params: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """
        获取列表中的卡片

        API: GET /lists/{id}/cards
        """
        cards = await self._request("GET", f"/lists/{list_id}/cards", params=params)
        logger.info("Retrieved %d cards for list %s", len(cards), list_id)
        return cards
