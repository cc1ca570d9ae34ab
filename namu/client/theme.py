from __future__ import annotations

from typing import Callable

from namu.client.observable import Writable
from namu.client.storage import KeyValueStorage

STORAGE_KEY = "darkMode"
DARK_MODE_CLASS = "dark-mode"


class ThemeStore:
    """Dark-mode flag: stored choice first, then the system preference."""

    def __init__(
        self,
        storage: KeyValueStorage,
        prefers_dark: Callable[[], bool] = lambda: False,
    ) -> None:
        self._storage = storage
        self.dark_mode: Writable[bool] = Writable(self._initial(prefers_dark))
        self.dark_mode.subscribe(self._persist)

    def _initial(self, prefers_dark: Callable[[], bool]) -> bool:
        stored = self._storage.get(STORAGE_KEY)
        if stored is not None:
            return stored == "true"
        return bool(prefers_dark())

    def _persist(self, value: bool) -> None:
        self._storage.set(STORAGE_KEY, "true" if value else "false")

    @property
    def css_class(self) -> str:
        return DARK_MODE_CLASS if self.dark_mode.get() else ""

    def toggle(self) -> bool:
        self.dark_mode.update(lambda current: not current)
        return self.dark_mode.get()
