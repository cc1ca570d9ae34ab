from __future__ import annotations


class ClientError(Exception):
    pass


class PermissionDenied(ClientError):
    def __init__(self, message: str = "Please grant notification permission to set a reminder."):
        super().__init__(message)


class NotificationsUnavailable(PermissionDenied):
    def __init__(self, message: str = "Notifications are not supported on this device."):
        super().__init__(message)


class RecipeNotFoundError(ClientError):
    def __init__(self, recipe_id: int):
        super().__init__(f"Saved recipe not found: {recipe_id}")
        self.recipe_id = recipe_id


class InvalidReminderTimeError(ClientError):
    def __init__(self, value: str):
        super().__init__(f"Invalid reminder time (expected HH:MM): {value!r}")
        self.value = value


class AuthFlowError(ClientError):
    def __init__(self, action: str, reason: str):
        super().__init__(f"{action} failed: {reason}")
        self.action = action
        self.reason = reason
