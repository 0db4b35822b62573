"""
OrganizationAPI - 组织（工作区）相关原子接口

对应 Trello REST API:
- GET    /organizations/{id}
- POST   /organizations
- PUT    /organizations/{id}
- DELETE /organizations/{id}
- GET    /organizations/{id}/boards
- GET    /organizations/{id}/members
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from .base import BaseAPI, fields_param

logger = logging.getLogger(__name__)


class OrganizationAPI(BaseAPI):
    """Trello 组织 API 封装"""

    async def get_organization(
        self, organization_id: str, fields: Optional[Iterable[str]] = None
    ) -> Dict[str, Any]:
        """
        获取组织详情

        API: GET /organizations/{id}

        Args:
            organization_id: 组织 ID 或短名称
            fields: 需要返回的字段
        """
        logger.debug("Getting organization: organization_id=%s", organization_id)
        return await self._request(
            "GET",
            f"/organizations/{organization_id}",
            params={"fields": fields_param(fields)},
        )

    async def create_organization(
        self,
        display_name: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        创建组织

        API: POST /organizations

        Args:
            display_name: 显示名称
            name: 短名称 (可选，小写字母、数字和下划线)
            description: 描述 (可选)

        Returns:
            新建组织 JSON
        """
        payload: Dict[str, Any] = {"displayName": display_name}
        if name:
            payload["name"] = name
        if description:
            payload["desc"] = description

        logger.info("Creating organization: display_name=%s", display_name)
        data = await self._request("POST", "/organizations", json=payload)
        logger.info("Organization created: id=%s", data.get("id"))
        return data

    async def update_organization(
        self, organization_id: str, payload: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        更新组织

        API: PUT /organizations/{id}
        """
        logger.debug(
            "Updating organization: organization_id=%s, payload=%s",
            organization_id,
            payload,
        )
        return await self._request(
            "PUT", f"/organizations/{organization_id}", json=payload
        )

    async def delete_organization(self, organization_id: str) -> None:
        """
        删除组织（不可恢复）

        API: DELETE /organizations/{id}
        """
        logger.info("Deleting organization: organization_id=%s", organization_id)
        await self._request("DELETE", f"/organizations/{organization_id}")

    async def get_boards(
        self, organization_id: str, params: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """
        获取组织下的看板

        API: GET /organizations/{id}/boards
        """
        boards = await self._request(
            "GET", f"/organizations/{organization_id}/boards", params=params
        )
        logger.info(
            "Retrieved %d boards for organization %s", len(boards), organization_id
        )
        return boards

    async def get_members(
        self, organization_id: str, params: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """
        获取组织成员

        API: GET /organizations/{id}/members
        """
        members = await self._request(
            "GET", f"/organizations/{organization_id}/members", params=params
        )
        logger.info(
            "Retrieved %d members for organization %s", len(members), organization_id
        )
        return members
