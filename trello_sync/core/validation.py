"""
字段校验规则

规则在发送请求之前执行，validate 返回 None 表示通过，否则返回错误描述。
"""

import re
from datetime import datetime
from enum import Enum
from numbers import Real
from typing import Any, Iterable, List, Optional, Type
from urllib.parse import urlparse

from trello_sync.core.errors import TrelloValidationError

_NAME_PATTERN = re.compile(r"^[a-z0-9_]{3,}$")


class ValidationRule:
    def validate(self, value: Any) -> Optional[str]:
        raise NotImplementedError


class NotNullRule(ValidationRule):
    def validate(self, value: Any) -> Optional[str]:
        if value is None:
            return "值不能为空"
        return None


class BooleanRule(ValidationRule):
    """值必须是 bool（None 交给 NotNullRule 判断）"""

    def validate(self, value: Any) -> Optional[str]:
        if value is not None and not isinstance(value, bool):
            return "必须是 True 或 False"
        return None


class DateTimeRule(ValidationRule):
    """值必须是 datetime，None 表示清空"""

    def validate(self, value: Any) -> Optional[str]:
        if value is not None and not isinstance(value, datetime):
            return "必须是 datetime 实例"
        return None


class NotNullOrWhiteSpaceRule(ValidationRule):
    def validate(self, value: Any) -> Optional[str]:
        if value is None or not isinstance(value, str) or not value.strip():
            return "值不能为空或空白字符串"
        return None


class MaxLengthRule(ValidationRule):
    def __init__(self, max_length: int):
        self.max_length = max_length

    def validate(self, value: Any) -> Optional[str]:
        if isinstance(value, str) and len(value) > self.max_length:
            return f"长度不能超过 {self.max_length} 个字符"
        return None


class UriRule(ValidationRule):
    def validate(self, value: Any) -> Optional[str]:
        if not isinstance(value, str):
            return "必须是有效的 URL"
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            return "必须是有效的 http/https URL"
        return None


class UsernameRule(ValidationRule):
    """用户名: 小写字母、数字和下划线，至少 3 个字符"""

    def validate(self, value: Any) -> Optional[str]:
        if not isinstance(value, str) or not _NAME_PATTERN.match(value):
            return "只能包含小写字母、数字和下划线，且至少 3 个字符"
        return None


class OrganizationNameRule(UsernameRule):
    """组织短名称与用户名规则相同"""

    pass


class PositionRule(ValidationRule):
    """位置: 正数，或 "top" / "bottom" """

    def validate(self, value: Any) -> Optional[str]:
        if isinstance(value, str):
            if value in ("top", "bottom"):
                return None
            return "位置只能是正数、'top' 或 'bottom'"
        if isinstance(value, bool) or not isinstance(value, Real) or value <= 0:
            return "位置只能是正数、'top' 或 'bottom'"
        return None


class EnumerationRule(ValidationRule):
    def __init__(self, enum_class: Type[Enum]):
        self.enum_class = enum_class

    def validate(self, value: Any) -> Optional[str]:
        if not isinstance(value, self.enum_class) or value.name == "UNKNOWN":
            known = [m.value for m in self.enum_class if m.name != "UNKNOWN"]
            return f"必须是 {self.enum_class.__name__} 的有效成员: {known}"
        return None


class EntityRule(ValidationRule):
    """值必须是指定类型的实体（按类名匹配，避免循环导入）"""

    def __init__(self, class_name: str, nullable: bool = False):
        self.class_name = class_name
        self.nullable = nullable

    def validate(self, value: Any) -> Optional[str]:
        if value is None:
            return None if self.nullable else "值不能为空"
        names = {cls.__name__ for cls in type(value).__mro__}
        if self.class_name not in names or not getattr(value, "id", None):
            return f"必须是 {self.class_name} 实例"
        return None


def validate_value(value: Any, rules: Iterable[ValidationRule]) -> List[str]:
    """执行全部规则，返回错误列表"""
    errors = []
    for rule in rules:
        error = rule.validate(value)
        if error:
            errors.append(error)
    return errors


def ensure_valid(value: Any, rules: Iterable[ValidationRule]) -> None:
    """
    Raises:
        TrelloValidationError: 任一规则不通过
    """
    errors = validate_value(value, rules)
    if errors:
        raise TrelloValidationError(value, errors)
