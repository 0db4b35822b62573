"""
MemberAPI - 成员相关原子接口

对应 Trello REST API:
- GET /members/{id}            (id 可以是 "me")
- PUT /members/{id}
- GET /members/{id}/boards
- GET /members/{id}/organizations
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from .base import BaseAPI, fields_param

logger = logging.getLogger(__name__)


class MemberAPI(BaseAPI):
    """Trello 成员 API 封装"""

    async def get_member(
        self, member_id: str, fields: Optional[Iterable[str]] = None
    ) -> Dict[str, Any]:
        """
        获取成员详情

        API: GET /members/{id}

        Args:
            member_id: 成员 ID、用户名，或 "me" 表示当前 token 对应的成员
            fields: 需要返回的字段

        Returns:
            成员 JSON
        """
        logger.debug("Getting member: member_id=%s", member_id)
        return await self._request(
            "GET", f"/members/{member_id}", params={"fields": fields_param(fields)}
        )

    async def update_member(
        self, member_id: str, payload: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        更新成员资料

        API: PUT /members/{id}
        """
        logger.debug("Updating member: member_id=%s, payload=%s", member_id, payload)
        return await self._request("PUT", f"/members/{member_id}", json=payload)

    async def get_boards(
        self, member_id: str, params: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """
        获取成员所在的看板

        API: GET /members/{id}/boards
        """
        boards = await self._request("GET", f"/members/{member_id}/boards", params=params)
        logger.info("Retrieved %d boards for member %s", len(boards), member_id)
        return boards

    async def get_organizations(
        self, member_id: str, params: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """
        获取成员所在的组织

        API: GET /members/{id}/organizations
        """
        organizations = await self._request(
            "GET", f"/members/{member_id}/organizations", params=params
        )
        logger.info(
            "Retrieved %d organizations for member %s", len(organizations), member_id
        )
        return organizations
