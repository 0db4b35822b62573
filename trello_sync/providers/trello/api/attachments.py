"""
AttachmentAPI - 卡片附件原子接口

附件没有独立的资源路径，全部挂在卡片下:
- GET    /cards/{id}/attachments
- POST   /cards/{id}/attachments
- GET    /cards/{id}/attachments/{idAttachment}
- DELETE /cards/{id}/attachments/{idAttachment}
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from .base import BaseAPI, fields_param

logger = logging.getLogger(__name__)


class AttachmentAPI(BaseAPI):
    """Trello 附件 API 封装"""

    async def get_attachment(
        self,
        card_id: str,
        attachment_id: str,
        fields: Optional[Iterable[str]] = None,
    ) -> Dict[str, Any]:
        """
        获取附件详情

        API: GET /cards/{id}/attachments/{idAttachment}

        Args:
            card_id: 附件所属卡片 ID
            attachment_id: 附件 ID
            fields: 需要返回的字段

        Returns:
            附件 JSON
        """
        logger.debug(
            "Getting attachment: card_id=%s, attachment_id=%s", card_id, attachment_id
        )
        return await self._request(
            "GET",
            f"/cards/{card_id}/attachments/{attachment_id}",
            params={"fields": fields_param(fields)},
        )

    async def list_attachments(
        self, card_id: str, params: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """
        获取卡片的全部附件

        API: GET /cards/{id}/attachments
        """
        attachments = await self._request(
            "GET", f"/cards/{card_id}/attachments", params=params
        )
        logger.info("Retrieved %d attachments for card %s", len(attachments), card_id)
        return attachments

    async def add_attachment(
        self,
        card_id: str,
        url: str,
        name: Optional[str] = None,
        mime_type: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        以 URL 形式添加附件

        API: POST /cards/{id}/attachments

        Args:
            card_id: 卡片 ID
            url: 附件地址
            name: 附件名称 (可选)
            mime_type: MIME 类型 (可选)

        Returns:
            新建附件 JSON
        """
        payload: Dict[str, Any] = {"url": url}
        if name:
            payload["name"] = name
        if mime_type:
            payload["mimeType"] = mime_type

        logger.info("Adding attachment: card_id=%s, url=%s", card_id, url)
        data = await self._request("POST", f"/cards/{card_id}/attachments", json=payload)
        logger.info("Attachment added: id=%s", data.get("id"))
        return data

    async def delete_attachment(self, card_id: str, attachment_id: str) -> None:
        """
        删除附件（不可恢复）

        API: DELETE /cards/{id}/attachments/{idAttachment}
        """
        logger.info(
            "Deleting attachment: card_id=%s, attachment_id=%s", card_id, attachment_id
        )
        await self._request("DELETE", f"/cards/{card_id}/attachments/{attachment_id}")
