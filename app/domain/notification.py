from dataclasses import dataclass
from enum import Enum


class NotificationKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class Notification:
    """Banner shown to the player: a kind plus a title and message"""

    kind: NotificationKind
    title: str
    message: str

    @classmethod
    def success(cls, title: str, message: str) -> "Notification":
        return cls(NotificationKind.SUCCESS, title, message)

    @classmethod
    def error(cls, title: str, message: str) -> "Notification":
        return cls(NotificationKind.ERROR, title, message)

    @classmethod
    def info(cls, title: str, message: str) -> "Notification":
        return cls(NotificationKind.INFO, title, message)
