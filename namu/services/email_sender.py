from __future__ import annotations

import html
import logging
from typing import Protocol

import resend

from namu.services.errors import EmailConfigurationError, EmailDeliveryError

log = logging.getLogger("email")


class EmailTransport(Protocol):
    def send(self, to: str, subject: str, html_body: str) -> None: ...


def shopping_list_html(body: str) -> str:
    return "<h3>Your Shopping List:</h3>" + html.escape(body).replace("\n", "<br>")


class EmailSender:
    """Transactional email through the Resend API."""

    def __init__(self, api_key: str, sender: str) -> None:
        self.api_key = api_key
        self.sender = sender

    def send(self, to: str, subject: str, html_body: str) -> None:
        if not self.api_key:
            raise EmailConfigurationError("Missing Resend API key.")
        resend.api_key = self.api_key
        params: resend.Emails.SendParams = {
            "from": self.sender,
            "to": [to],
            "subject": subject,
            "html": html_body,
        }
        try:
            result = resend.Emails.send(params)
        except Exception as exc:
            raise EmailDeliveryError(to, str(exc)) from exc
        log.info("email.sent to=%s id=%s", to, result.get("id") if isinstance(result, dict) else None)
