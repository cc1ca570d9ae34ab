from __future__ import annotations

from typing import Optional

from namu.app.config import settings
from namu.app.domain.models import TimerHandle, ToastConfig, ToastType
from namu.client.observable import Writable
from namu.client.timers import Timer


class ToastStore:
    def __init__(self, timer: Timer, duration_seconds: Optional[float] = None) -> None:
        self._timer = timer
        self.duration_seconds = (
            settings.TOAST_DURATION_SECONDS if duration_seconds is None else duration_seconds
        )
        self.state: Writable[ToastConfig] = Writable(ToastConfig())
        self._hide_handle: Optional[TimerHandle] = None

    def show(self, message: str, type: ToastType = "info") -> None:
        # a newer toast gets its full display time
        self._cancel_hide()
        self.state.set(ToastConfig(message=message, type=type, visible=True))
        self._hide_handle = self._timer.set_timeout(self.hide, self.duration_seconds)

    def hide(self) -> None:
        self._cancel_hide()
        current = self.state.get()
        self.state.set(ToastConfig(message=current.message, type=current.type, visible=False))

    def _cancel_hide(self) -> None:
        if self._hide_handle is not None:
            self._timer.clear(self._hide_handle)
            self._hide_handle = None
