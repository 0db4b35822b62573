"""
SyncedField - 实体上的同步字段描述符

属性访问直接返回本地缓存值（不发请求，未加载时为 None），
懒加载读取使用 await entity.fetch("name")，修改使用 await entity.update(name=...)。
"""

from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Type

from trello_sync.core.validation import ValidationRule, validate_value

Converter = Callable[[Any, Any], Any]
Serializer = Callable[[Any], Any]


class SyncedField:
    def __init__(
        self,
        attr: Optional[str] = None,
        *,
        json_name: Optional[str] = None,
        converter: Optional[Converter] = None,
        serializer: Optional[Serializer] = None,
        rules: Sequence[ValidationRule] = (),
        readonly: bool = False,
    ):
        """
        Args:
            attr: schema 中的字段路径，嵌套字段用 "." 分隔，默认与属性名相同
            json_name: 提交更新时使用的键，默认取 schema 字段的 alias
            converter: (entity, raw) -> 属性值
            serializer: 属性值 -> JSON 值
            rules: 提交前执行的校验规则
            readonly: 只读字段不能通过 update 修改
        """
        self.name = ""
        self.attr = attr
        self.json_name = json_name
        self.converter = converter
        self.serializer = serializer
        self.rules = list(rules)
        self.readonly = readonly

    def __set_name__(self, owner: Type, name: str) -> None:
        self.name = name
        if self.attr is None:
            self.attr = name
        if self.json_name is None:
            schema = getattr(owner, "schema", None)
            field_info = schema.model_fields.get(self.root) if schema else None
            self.json_name = field_info.alias if field_info and field_info.alias else self.root

    @property
    def root(self) -> str:
        return self.attr.split(".")[0]

    def __get__(self, obj: Any, objtype: Optional[Type] = None) -> Any:
        if obj is None:
            return self
        return self.convert(obj, obj._context.peek(self.attr))

    def __set__(self, obj: Any, value: Any) -> None:
        raise AttributeError(
            f"'{self.name}' 不能直接赋值，请使用 await {type(obj).__name__}.update({self.name}=...)"
        )

    def convert(self, obj: Any, raw: Any) -> Any:
        if raw is None or self.converter is None:
            return raw
        return self.converter(obj, raw)

    def validate(self, value: Any) -> List[str]:
        return validate_value(value, self.rules)

    def serialize(self, value: Any) -> Any:
        if value is None:
            return None
        if self.serializer is not None:
            return self.serializer(value)
        if isinstance(value, datetime):
            return value.isoformat()
        return value

    def to_changes(self, value: Any) -> Dict[str, Any]:
        """把新值转换为以字段名为键的（嵌套）dict，用于本地合并"""
        parts = self.attr.split(".")
        changes: Dict[str, Any] = {parts[-1]: self.serialize(value)}
        for part in reversed(parts[:-1]):
            changes = {part: changes}
        return changes

    def __repr__(self) -> str:
        return f"SyncedField({self.name!r}, attr={self.attr!r})"


def reference(class_name: str) -> Converter:
    """ID -> 实体，经过身份缓存解析"""

    def convert(obj: Any, raw: Any) -> Any:
        return obj._reference(class_name, raw)

    return convert


def entity_id(value: Any) -> Any:
    return value.id


def enumeration(enum_class: Type[Enum]) -> Converter:
    """原始值 -> 枚举成员，每个原始值只转换一次（未识别值的告警只记录一次）"""
    converted: Dict[Any, Enum] = {}

    def convert(obj: Any, raw: Any) -> Any:
        member = converted.get(raw)
        if member is None:
            member = converted[raw] = enum_class(raw)
        return member

    return convert


def enum_value(value: Enum) -> Any:
    return value.value
