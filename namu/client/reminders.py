# namu/client/reminders.py
"""
Time-of-day reminders for saved recipes.

Each armed recipe owns one recurring timer. Every tick, and once right after
arming, the local clock's hour and minute are compared with the recipe's
reminder time and a notification is shown on an exact match.

Everything runs on a single event loop thread: arm, disarm and the tick
callbacks never interleave mid-step, so the handle bookkeeping needs no lock.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Union

from namu.app.config import settings
from namu.app.domain.errors import NotificationsUnavailable, PermissionDenied
from namu.app.domain.models import ReminderTime, SavedRecipe, TimerHandle
from namu.client.notifications import Notifier
from namu.client.timers import Timer

log = logging.getLogger("reminders")

NOTIFICATION_BODY = "It's time to cook your saved recipe!"


def notification_title(recipe: SavedRecipe) -> str:
    return f"Meal Reminder: {recipe.title}"


class ReminderScheduler:
    def __init__(
        self,
        notifier: Notifier,
        timer: Timer,
        clock: Callable[[], datetime] = datetime.now,
        interval_seconds: Optional[float] = None,
    ) -> None:
        self._notifier = notifier
        self._timer = timer
        self._clock = clock
        self.interval_seconds = (
            settings.REMINDER_CHECK_INTERVAL_SECONDS if interval_seconds is None else interval_seconds
        )
        self._active: dict[int, TimerHandle] = {}

    @property
    def active_count(self) -> int:
        return len(self._active)

    def is_armed(self, recipe_id: int) -> bool:
        return recipe_id in self._active

    def ensure_permission(self) -> None:
        """
        Raises:
            NotificationsUnavailable: no notification facility at all
            PermissionDenied: permission refused (asked once if undecided)
        """
        if not self._notifier.available:
            raise NotificationsUnavailable()

        permission = self._notifier.permission
        if permission == "default":
            permission = self._notifier.request_permission()
        if permission != "granted":
            raise PermissionDenied()

    def arm(self, recipe: SavedRecipe, time: Union[ReminderTime, str]) -> TimerHandle:
        reminder_time = time if isinstance(time, ReminderTime) else ReminderTime.parse(time)
        self.ensure_permission()

        if recipe.armed or recipe.id in self._active:
            self.disarm(recipe)

        handle = self._timer.set_interval(lambda: self.check(recipe), self.interval_seconds)
        recipe.reminder_time = reminder_time
        recipe.reminder_handle = handle
        self._active[recipe.id] = handle
        log.info(
            "reminders.armed recipe=%s at=%s every=%ss",
            recipe.id,
            reminder_time,
            self.interval_seconds,
        )

        self.check(recipe)
        return handle

    def disarm(self, recipe: SavedRecipe, keep_time: bool = False) -> None:
        """Cancel the recipe's timer, if any. Safe to call on an unarmed recipe."""
        # the scheduler's table wins over the object, which may be a stale copy
        handle = self._active.pop(recipe.id, None)
        if handle is not None:
            self._timer.clear(handle)
            log.info("reminders.disarmed recipe=%s", recipe.id)

        recipe.reminder_handle = None
        if not keep_time:
            recipe.reminder_time = None

    def check(self, recipe: SavedRecipe) -> bool:
        reminder_time = recipe.reminder_time
        if reminder_time is None:
            return False

        now = self._clock()
        if now.hour != reminder_time.hour or now.minute != reminder_time.minute:
            return False

        self._notifier.show(notification_title(recipe), NOTIFICATION_BODY)
        log.info("reminders.fired recipe=%s title=%r at=%s", recipe.id, recipe.title, reminder_time)
        return True
