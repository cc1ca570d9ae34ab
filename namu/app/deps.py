# namu/app/deps.py (singletons exposed as dependencies)

from __future__ import annotations

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from supabase import Client, create_client

from namu.app.config import settings
from namu.app.domain.models import UserSession
from namu.services.email_sender import EmailSender, EmailTransport
from namu.services.gemini_client import GeminiClient, TextGenerator

_client: Client | None = None
_generator: GeminiClient | None = None
_email_sender: EmailSender | None = None


def get_supabase() -> Client:
    global _client
    if _client is None:
        if settings.SUPABASE_URL is None:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Authentication backend is not configured",
            )
        _client = create_client(str(settings.SUPABASE_URL),
                                settings.SUPABASE_ANON_KEY.get_secret_value())
    return _client


def get_generator() -> TextGenerator:
    global _generator
    if _generator is None:
        _generator = GeminiClient(
            api_key=settings.GEMINI_API_KEY.get_secret_value(),
            model_name=settings.GEMINI_MODEL,
        )
    return _generator


def get_email_sender() -> EmailTransport:
    global _email_sender
    if _email_sender is None:
        _email_sender = EmailSender(
            api_key=settings.RESEND_API_KEY.get_secret_value(),
            sender=settings.EMAIL_FROM,
        )
    return _email_sender


auth_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    cred: HTTPAuthorizationCredentials | None = Depends(auth_scheme),
    supa: Client = Depends(get_supabase),
) -> UserSession:
    """
    Reads Authorization: Bearer <access_token>, validates it against Supabase
    auth and returns the minimal identity. A present session is the only
    authorization there is.
    """
    if cred is None or cred.scheme.lower() != "bearer":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")

    try:
        res = supa.auth.get_user(cred.credentials)
        user = res.user if res else None
        if not user:
            raise HTTPException(status_code=401, detail="Invalid token")

        name = None
        meta = getattr(user, "user_metadata", None) or {}
        if isinstance(meta, dict):
            name = meta.get("full_name") or meta.get("name")

        return UserSession(id=str(user.id), email=user.email, name=name)
    except HTTPException:
        raise
    except Exception:
        raise HTTPException(status_code=401, detail="Invalid/expired token")
