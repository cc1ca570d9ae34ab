# namu/client/favorites.py
"""
Favorited recipes, persisted to local storage on every change.
"""
from __future__ import annotations

import json
import logging
import re
import time
from typing import Callable

from namu.app.domain.errors import InvalidReminderTimeError, PermissionDenied, RecipeNotFoundError
from namu.app.domain.models import SavedRecipe
from namu.client.observable import Writable
from namu.client.reminders import ReminderScheduler
from namu.client.storage import KeyValueStorage

log = logging.getLogger("favorites")

STORAGE_KEY = "favoriteRecipes"

# "Recipe Title: X", optionally as a markdown heading and/or bold. A bare
# "Recipe Title" heading takes the title from the next line.
_TITLE_RE = re.compile(
    r"^#*[ \t]*(?:\*\*)?Recipe Title[ \t]*(?::[ \t]*(?:\*\*)?|\*\*[ \t]*:?|$)\s*(.*)",
    re.MULTILINE,
)


def _now_ms() -> int:
    return int(time.time() * 1000)


def extract_title(content: str, recipe_id: int) -> str:
    match = _TITLE_RE.search(content)
    if match:
        title = match.group(1).strip().strip("*").strip()
        if title:
            return title
    return f"Untitled Recipe {recipe_id}"


class FavoritesStore:
    def __init__(
        self,
        storage: KeyValueStorage,
        scheduler: ReminderScheduler,
        clock_ms: Callable[[], int] = _now_ms,
    ) -> None:
        self._storage = storage
        self._scheduler = scheduler
        self._clock_ms = clock_ms
        self.recipes: Writable[list[SavedRecipe]] = Writable(self._load())
        self._last_id = max((r.id for r in self.recipes.get()), default=0)
        self.recipes.subscribe(self._persist)

    def _load(self) -> list[SavedRecipe]:
        raw = self._storage.get(STORAGE_KEY)
        if not raw:
            return []
        try:
            records = json.loads(raw)
        except json.JSONDecodeError:
            log.warning("favorites.corrupt_storage key=%s", STORAGE_KEY)
            return []
        if not isinstance(records, list):
            return []

        recipes: list[SavedRecipe] = []
        for record in records:
            try:
                recipes.append(SavedRecipe.from_record(record))
            except (KeyError, TypeError, ValueError, AttributeError, InvalidReminderTimeError) as exc:
                log.warning("favorites.skip_record error=%s", exc)
        return recipes

    def _persist(self, recipes: list[SavedRecipe]) -> None:
        payload = json.dumps([r.to_record() for r in recipes], ensure_ascii=False)
        self._storage.set(STORAGE_KEY, payload)

    def _commit(self) -> None:
        self.recipes.set(list(self.recipes.get()))

    def _next_id(self) -> int:
        self._last_id = max(self._clock_ms(), self._last_id + 1)
        return self._last_id

    def all(self) -> list[SavedRecipe]:
        return list(self.recipes.get())

    def get(self, recipe_id: int) -> SavedRecipe:
        for recipe in self.recipes.get():
            if recipe.id == recipe_id:
                return recipe
        raise RecipeNotFoundError(recipe_id)

    def add(self, content: str) -> SavedRecipe:
        recipe_id = self._next_id()
        recipe = SavedRecipe(
            id=recipe_id,
            title=extract_title(content, recipe_id),
            content=content,
            timestamp=recipe_id,
        )
        self.recipes.update(lambda recipes: [*recipes, recipe])
        log.info("favorites.added recipe=%s title=%r", recipe.id, recipe.title)
        return recipe

    def remove(self, recipe_id: int) -> bool:
        try:
            recipe = self.get(recipe_id)
        except RecipeNotFoundError:
            return False

        self._scheduler.disarm(recipe)
        self.recipes.update(lambda recipes: [r for r in recipes if r.id != recipe_id])
        log.info("favorites.removed recipe=%s", recipe_id)
        return True

    def set_reminder(self, recipe_id: int, time_of_day: str) -> SavedRecipe:
        recipe = self.get(recipe_id)
        self._scheduler.arm(recipe, time_of_day)
        self._commit()
        return recipe

    def clear_reminder(self, recipe_id: int) -> SavedRecipe:
        recipe = self.get(recipe_id)
        self._scheduler.disarm(recipe)
        self._commit()
        return recipe

    def toggle_reminder(self, recipe_id: int, time_of_day: str) -> bool:
        """Disarm an armed reminder, otherwise arm one. Returns the new armed state."""
        recipe = self.get(recipe_id)
        if recipe.armed:
            self.clear_reminder(recipe_id)
            return False
        self.set_reminder(recipe_id, time_of_day)
        return True

    def resume_reminders(self) -> int:
        """Re-arm reminder times loaded from storage. Returns how many were armed."""
        pending = [r for r in self.recipes.get() if r.reminder_time is not None and not r.armed]
        armed = 0
        for recipe in pending:
            try:
                self._scheduler.arm(recipe, recipe.reminder_time)
            except PermissionDenied as exc:
                log.warning("favorites.resume_blocked reason=%s", exc)
                break
            armed += 1
        if armed:
            self._commit()
        return armed

    def close(self) -> None:
        """Cancel every timer, keeping the configured times for the next session."""
        for recipe in self.recipes.get():
            self._scheduler.disarm(recipe, keep_time=True)

