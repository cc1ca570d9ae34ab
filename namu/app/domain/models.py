# namu/app/domain/models.py
"""
Domain models shared by the HTTP surface and the client context.
These are pure data structures with no infrastructure dependencies.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Optional

from namu.app.domain.errors import InvalidReminderTimeError

_TIME_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")

ToastType = Literal["success", "error", "warning", "info"]


class StreamState(str, Enum):
    """Lifecycle of one relayed generation stream."""
    OPEN = "OPEN"
    CLOSED = "CLOSED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class TimerHandle:
    """Opaque reference to a scheduled timer, issued by a Timer."""
    value: int


@dataclass(frozen=True)
class ReminderTime:
    """Local time of day at which a reminder fires."""
    hour: int
    minute: int

    def __post_init__(self) -> None:
        if not (0 <= self.hour <= 23 and 0 <= self.minute <= 59):
            raise InvalidReminderTimeError(f"{self.hour}:{self.minute}")

    @classmethod
    def parse(cls, value: str) -> "ReminderTime":
        m = _TIME_RE.match(value or "")
        if not m:
            raise InvalidReminderTimeError(value)
        hour, minute = int(m.group(1)), int(m.group(2))
        if hour > 23 or minute > 59:
            raise InvalidReminderTimeError(value)
        return cls(hour=hour, minute=minute)

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


@dataclass
class SavedRecipe:
    """
    A favorited recipe kept in local storage.

    The reminder handle is runtime-only state owned by the reminder scheduler;
    it is never written to storage.
    """
    id: int
    title: str
    content: str
    timestamp: int  # ms since epoch
    reminder_time: Optional[ReminderTime] = None
    reminder_handle: Optional[TimerHandle] = None

    @property
    def armed(self) -> bool:
        return self.reminder_handle is not None

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "timestamp": self.timestamp,
            "reminderTime": str(self.reminder_time) if self.reminder_time else None,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "SavedRecipe":
        raw_time = record.get("reminderTime")
        return cls(
            id=int(record["id"]),
            title=str(record.get("title") or ""),
            content=str(record.get("content") or ""),
            timestamp=int(record.get("timestamp") or record["id"]),
            reminder_time=ReminderTime.parse(raw_time) if raw_time else None,
        )


@dataclass
class ToastConfig:
    message: str = ""
    type: ToastType = "info"
    visible: bool = False


@dataclass(frozen=True)
class UserSession:
    """Identity of a signed-in user."""
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
