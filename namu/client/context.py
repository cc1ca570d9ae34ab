from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from namu.client.favorites import FavoritesStore
from namu.client.notifications import Notifier, ToastNotifier
from namu.client.reminders import ReminderScheduler
from namu.client.session import AuthBackend, SessionStore
from namu.client.storage import JsonFileStorage, KeyValueStorage
from namu.client.theme import ThemeStore
from namu.client.timers import AsyncioTimer, Timer
from namu.client.toast import ToastStore


@dataclass
class ClientContext:
    storage: KeyValueStorage
    timer: Timer
    toasts: ToastStore
    scheduler: ReminderScheduler
    favorites: FavoritesStore
    theme: ThemeStore
    session: Optional[SessionStore] = None

    def close(self) -> None:
        self.favorites.close()
        if self.session is not None:
            self.session.close()


def build_client_context(
    storage: KeyValueStorage | Path,
    timer: Optional[Timer] = None,
    notifier: Optional[Notifier] = None,
    auth: Optional[AuthBackend] = None,
    prefers_dark: Callable[[], bool] = lambda: False,
    resume_reminders: bool = True,
) -> ClientContext:
    """
    Wire up the per-device stores. With the default AsyncioTimer this must be
    called from inside a running event loop.
    """
    if isinstance(storage, Path):
        storage = JsonFileStorage(storage)
    timer = timer or AsyncioTimer()
    toasts = ToastStore(timer)
    scheduler = ReminderScheduler(notifier or ToastNotifier(toasts), timer)
    favorites = FavoritesStore(storage, scheduler)
    if resume_reminders:
        favorites.resume_reminders()

    return ClientContext(
        storage=storage,
        timer=timer,
        toasts=toasts,
        scheduler=scheduler,
        favorites=favorites,
        theme=ThemeStore(storage, prefers_dark),
        session=SessionStore(auth) if auth is not None else None,
    )
