"""
Trello Manager 层 - 实体入口

核心组件:
- TrelloFactory: 通过身份缓存返回实体对象
"""

from .factory import TrelloFactory

__all__ = [
    "TrelloFactory",
]
