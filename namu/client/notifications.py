from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Literal, Protocol

if TYPE_CHECKING:
    from namu.client.toast import ToastStore

log = logging.getLogger("notifications")

Permission = Literal["granted", "denied", "default"]


class Notifier(Protocol):
    available: bool
    permission: Permission

    def request_permission(self) -> Permission: ...

    def show(self, title: str, body: str) -> None: ...


class ToastNotifier:
    """Shows notifications in-app through the toast store; always permitted."""

    available = True
    permission: Permission = "granted"

    def __init__(self, toasts: "ToastStore") -> None:
        self._toasts = toasts

    def request_permission(self) -> Permission:
        return self.permission

    def show(self, title: str, body: str) -> None:
        log.debug("notifications.toast title=%r", title)
        self._toasts.show(f"{title} - {body}", "info")
