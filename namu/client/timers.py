from __future__ import annotations

import asyncio
import itertools
from typing import Callable, Optional, Protocol

from namu.app.domain.models import TimerHandle

Callback = Callable[[], None]


class Timer(Protocol):
    def set_interval(self, callback: Callback, seconds: float) -> TimerHandle: ...

    def set_timeout(self, callback: Callback, seconds: float) -> TimerHandle: ...

    def clear(self, handle: TimerHandle) -> None: ...


class AsyncioTimer:
    """Timers on an asyncio event loop. Must be used from the loop's thread."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop
        self._ids = itertools.count(1)
        self._pending: dict[int, asyncio.TimerHandle] = {}

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    @property
    def active(self) -> int:
        return len(self._pending)

    def set_timeout(self, callback: Callback, seconds: float) -> TimerHandle:
        handle = TimerHandle(next(self._ids))

        def fire() -> None:
            self._pending.pop(handle.value, None)
            callback()

        self._pending[handle.value] = self._get_loop().call_later(seconds, fire)
        return handle

    def set_interval(self, callback: Callback, seconds: float) -> TimerHandle:
        handle = TimerHandle(next(self._ids))
        loop = self._get_loop()

        def tick() -> None:
            # re-arm first so the callback may clear its own interval
            self._pending[handle.value] = loop.call_later(seconds, tick)
            callback()

        self._pending[handle.value] = loop.call_later(seconds, tick)
        return handle

    def clear(self, handle: TimerHandle) -> None:
        pending = self._pending.pop(handle.value, None)
        if pending is not None:
            pending.cancel()
