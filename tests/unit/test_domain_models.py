from __future__ import annotations

import pytest

from namu.app.domain.errors import InvalidReminderTimeError
from namu.app.domain.models import (
    ReminderTime,
    SavedRecipe,
    StreamState,
    TimerHandle,
    ToastConfig,
)


class TestStreamState:
    def test_stream_state_values(self) -> None:
        assert StreamState.OPEN.value == "OPEN"
        assert StreamState.CLOSED.value == "CLOSED"
        assert StreamState.FAILED.value == "FAILED"

    def test_stream_state_is_string_enum(self) -> None:
        assert isinstance(StreamState.OPEN, str)
        assert StreamState.OPEN == "OPEN"


class TestReminderTime:
    def test_parse(self) -> None:
        assert ReminderTime.parse("07:05") == ReminderTime(hour=7, minute=5)
        assert ReminderTime.parse("7:05") == ReminderTime(hour=7, minute=5)

    def test_str_is_zero_padded(self) -> None:
        assert str(ReminderTime(7, 5)) == "07:05"

    @pytest.mark.parametrize("value", ["", "7pm", "24:00", "12:60", "12-30"])
    def test_parse_rejects_invalid(self, value: str) -> None:
        with pytest.raises(InvalidReminderTimeError):
            ReminderTime.parse(value)

    def test_constructor_validates_range(self) -> None:
        with pytest.raises(InvalidReminderTimeError):
            ReminderTime(hour=25, minute=0)


class TestSavedRecipe:
    def test_create_minimal(self) -> None:
        recipe = SavedRecipe(id=1, title="Soup", content="# Soup", timestamp=1)

        assert recipe.reminder_time is None
        assert recipe.reminder_handle is None
        assert recipe.armed is False

    def test_armed_follows_handle(self) -> None:
        recipe = SavedRecipe(id=1, title="Soup", content="", timestamp=1)
        recipe.reminder_handle = TimerHandle(3)

        assert recipe.armed is True

    def test_record_excludes_handle(self) -> None:
        recipe = SavedRecipe(
            id=1,
            title="Soup",
            content="# Soup",
            timestamp=1,
            reminder_time=ReminderTime(18, 0),
            reminder_handle=TimerHandle(9),
        )

        record = recipe.to_record()

        assert record == {
            "id": 1,
            "title": "Soup",
            "content": "# Soup",
            "timestamp": 1,
            "reminderTime": "18:00",
        }

    def test_from_record_ignores_stale_handle(self) -> None:
        recipe = SavedRecipe.from_record(
            {"id": 2, "title": "Pie", "content": "c", "timestamp": 2,
             "reminderTime": "08:15", "reminderIntervalId": 17}
        )

        assert recipe.reminder_time == ReminderTime(8, 15)
        assert recipe.armed is False


class TestToastConfig:
    def test_defaults_hidden_info(self) -> None:
        toast = ToastConfig()

        assert toast.message == ""
        assert toast.type == "info"
        assert toast.visible is False
