"""User-facing notices (the app's toasts)."""

from dataclasses import dataclass
from enum import Enum


class NoticeLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class Notice:
    message: str
    level: NoticeLevel = NoticeLevel.INFO

    @classmethod
    def success(cls, message: str) -> "Notice":
        return cls(message, NoticeLevel.SUCCESS)

    @classmethod
    def error(cls, message: str) -> "Notice":
        return cls(message, NoticeLevel.ERROR)
