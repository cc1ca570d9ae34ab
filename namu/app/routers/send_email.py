# namu/app/routers/send_email.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool
from starlette.responses import PlainTextResponse

from namu.app.deps import get_email_sender
from namu.app.schemas.generate import EmailRequest
from namu.services.email_sender import EmailTransport, shopping_list_html
from namu.services.errors import EmailConfigurationError, UpstreamFailure, ValidationError

log = logging.getLogger("email")
router = APIRouter(prefix="/api", tags=["email"])

INVALID_BODY_MESSAGE = "Missing recipient, subject or body."


@router.post("/send-email")
async def send_email(
    payload: EmailRequest,
    sender: EmailTransport = Depends(get_email_sender),
) -> PlainTextResponse:
    recipient = (payload.recipient or "").strip()
    subject = (payload.subject or "").strip()
    if not recipient or "@" not in recipient or not subject or payload.body is None:
        raise ValidationError(INVALID_BODY_MESSAGE)

    try:
        await run_in_threadpool(sender.send, recipient, subject, shopping_list_html(payload.body))
    except (UpstreamFailure, EmailConfigurationError) as exc:
        log.error("email.send_failed endpoint=send-email error=%s", exc)
        return PlainTextResponse("Email send failed.", status_code=500)

    return PlainTextResponse("Email sent successfully", status_code=200)
