from __future__ import annotations

from typing import Optional

from pydantic import AnyUrl, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8-sig",
        case_sensitive=False,
        extra="ignore",
    )

    GEMINI_API_KEY: SecretStr = SecretStr("")
    GEMINI_MODEL: str = "gemini-2.5-flash"

    RESEND_API_KEY: SecretStr = SecretStr("")
    EMAIL_FROM: str = "Namu Namu AI <onboarding@resend.dev>"

    SUPABASE_URL: Optional[AnyUrl] = None
    SUPABASE_ANON_KEY: SecretStr = SecretStr("")

    APP_ENV: str = "local"
    FRONTEND_CORS_ORIGINS: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
    )

    # Client context
    REMINDER_CHECK_INTERVAL_SECONDS: float = 60
    TOAST_DURATION_SECONDS: float = 3


settings = Settings()
