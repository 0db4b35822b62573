from datetime import datetime, timezone
from typing import Optional


def mask_secret(value: str, visible_chars: int = 4) -> str:
    """对 key/token 进行脱敏处理，仅显示前几个字符"""
    if not value or len(value) <= visible_chars:
        return "***"
    return f"{value[:visible_chars]}***"


def extract_creation_date(entity_id: Optional[str]) -> Optional[datetime]:
    """
    从 Trello ID 中解析创建时间

    Trello ID 是 24 位十六进制的 ObjectId，前 8 位是创建时的 Unix 时间戳。

    Returns:
        UTC 时间，ID 无法解析时返回 None
    """
    if not entity_id or len(entity_id) != 24:
        return None
    try:
        timestamp = int(entity_id[:8], 16)
    except ValueError:
        return None
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)
