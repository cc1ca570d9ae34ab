from __future__ import annotations

import itertools
from datetime import datetime
from typing import Callable

import pytest

from namu.app.domain.models import TimerHandle
from namu.client.storage import MemoryStorage


class ManualTimer:
    """Timer whose ticks are driven explicitly by the test."""

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self.intervals: dict[int, tuple[Callable[[], None], float]] = {}
        self.timeouts: dict[int, tuple[Callable[[], None], float]] = {}
        self.cleared: list[TimerHandle] = []

    def set_interval(self, callback: Callable[[], None], seconds: float) -> TimerHandle:
        handle = TimerHandle(next(self._ids))
        self.intervals[handle.value] = (callback, seconds)
        return handle

    def set_timeout(self, callback: Callable[[], None], seconds: float) -> TimerHandle:
        handle = TimerHandle(next(self._ids))
        self.timeouts[handle.value] = (callback, seconds)
        return handle

    def clear(self, handle: TimerHandle) -> None:
        self.cleared.append(handle)
        self.intervals.pop(handle.value, None)
        self.timeouts.pop(handle.value, None)

    def tick(self) -> None:
        for callback, _ in list(self.intervals.values()):
            callback()

    def fire_timeouts(self) -> None:
        for key, (callback, _) in list(self.timeouts.items()):
            self.timeouts.pop(key, None)
            callback()

    @property
    def active(self) -> int:
        return len(self.intervals)


class NotifierStub:
    def __init__(self, permission: str = "granted", available: bool = True) -> None:
        self.available = available
        self.permission = permission
        self.permission_after_request = "granted"
        self.permission_requests = 0
        self.shown: list[tuple[str, str]] = []

    def request_permission(self) -> str:
        self.permission_requests += 1
        self.permission = self.permission_after_request
        return self.permission

    def show(self, title: str, body: str) -> None:
        self.shown.append((title, body))


class FixedClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def set(self, hour: int, minute: int) -> None:
        self.now = self.now.replace(hour=hour, minute=minute)


@pytest.fixture
def timer() -> ManualTimer:
    return ManualTimer()


@pytest.fixture
def notifier() -> NotifierStub:
    return NotifierStub()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2024, 5, 20, 14, 7, 30))


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()
