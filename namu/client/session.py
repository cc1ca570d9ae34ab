# namu/client/session.py
"""
Current authentication session as an observable value.

The value starts as UNKNOWN (auth state not reported yet), then becomes None
(signed out) or a UserSession (signed in) as the auth backend reports changes.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Protocol, Union

from supabase import Client

from namu.app.domain.errors import AuthFlowError
from namu.app.domain.models import UserSession
from namu.client.observable import Writable

log = logging.getLogger("session")


class _Unknown:
    def __repr__(self) -> str:
        return "UNKNOWN"


UNKNOWN = _Unknown()

SessionValue = Union[UserSession, None, _Unknown]
SessionCallback = Callable[[Optional[UserSession]], None]


class AuthBackend(Protocol):
    def sign_in_url(self) -> str: ...

    def complete_sign_in(self, auth_code: str) -> Optional[UserSession]: ...

    def sign_out(self) -> None: ...

    def on_change(self, callback: SessionCallback) -> Callable[[], None]: ...


def user_from_session(session: Any) -> Optional[UserSession]:
    user = getattr(session, "user", None) if session is not None else None
    if user is None:
        return None
    meta = getattr(user, "user_metadata", None) or {}
    name = (meta.get("full_name") or meta.get("name")) if isinstance(meta, dict) else None
    return UserSession(id=str(user.id), email=getattr(user, "email", None), name=name)


class SupabaseAuth:
    """Google sign-in through Supabase auth (OAuth popup/redirect flow)."""

    def __init__(self, client: Client, redirect_to: Optional[str] = None) -> None:
        self._client = client
        self.redirect_to = redirect_to

    def sign_in_url(self) -> str:
        options = {"redirect_to": self.redirect_to} if self.redirect_to else {}
        res = self._client.auth.sign_in_with_oauth({"provider": "google", "options": options})
        return res.url

    def complete_sign_in(self, auth_code: str) -> Optional[UserSession]:
        res = self._client.auth.exchange_code_for_session({"auth_code": auth_code})
        return user_from_session(getattr(res, "session", None))

    def sign_out(self) -> None:
        self._client.auth.sign_out()

    def on_change(self, callback: SessionCallback) -> Callable[[], None]:
        subscription = self._client.auth.on_auth_state_change(
            lambda _event, session: callback(user_from_session(session))
        )
        return subscription.unsubscribe


class SessionStore:
    def __init__(self, auth: AuthBackend) -> None:
        self._auth = auth
        self.user: Writable[SessionValue] = Writable(UNKNOWN)
        self._stop_listening = auth.on_change(self._on_auth_change)

    def _on_auth_change(self, user: Optional[UserSession]) -> None:
        log.info("session.changed signed_in=%s", user is not None)
        self.user.set(user)

    @property
    def signed_in(self) -> bool:
        return isinstance(self.user.get(), UserSession)

    def sign_in(self) -> str:
        """Start the sign-in flow; returns the URL to open in the popup."""
        try:
            return self._auth.sign_in_url()
        except Exception as exc:
            log.error("session.sign_in_failed error=%s", exc)
            raise AuthFlowError("Sign-in", str(exc)) from exc

    def complete_sign_in(self, auth_code: str) -> Optional[UserSession]:
        """Finish the redirect flow with the code from the callback URL."""
        try:
            user = self._auth.complete_sign_in(auth_code)
        except Exception as exc:
            log.error("session.sign_in_failed error=%s", exc)
            raise AuthFlowError("Sign-in", str(exc)) from exc
        self.user.set(user)
        return user

    def sign_out(self) -> None:
        try:
            self._auth.sign_out()
        except Exception as exc:
            log.error("session.sign_out_failed error=%s", exc)
            raise AuthFlowError("Sign-out", str(exc)) from exc

    def close(self) -> None:
        self._stop_listening()
