import logging
from enum import Enum

logger = logging.getLogger(__name__)


class _KnownValuesEnum(str, Enum):
    """未识别的值映射为 UNKNOWN（可能是 API 新增的取值）"""

    @classmethod
    def _missing_(cls, value):
        logger.warning("Unrecognized %s value: %r", cls.__name__, value)
        return cls.UNKNOWN


class OrganizationPermissionLevel(_KnownValuesEnum):
    UNKNOWN = "unknown"
    PRIVATE = "private"  # 仅成员可见
    PUBLIC = "public"  # 任何人可见


class BoardPermissionLevel(_KnownValuesEnum):
    UNKNOWN = "unknown"
    PRIVATE = "private"
    ORGANIZATION = "org"
    PUBLIC = "public"
