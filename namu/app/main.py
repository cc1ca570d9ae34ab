# namu/app/main.py
from __future__ import annotations
import logging
import sys
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import PlainTextResponse

from namu import __version__
from namu.app.config import settings
from namu.app.routers.auth import router as auth_router
from namu.app.routers.send_email import INVALID_BODY_MESSAGE as EMAIL_BODY_MESSAGE
from namu.app.routers.send_email import router as email_router
from namu.app.routers.generate import INVALID_BODY_MESSAGES
from namu.app.routers.generate import router as generate_router
from namu.services.errors import ServiceError, ValidationError

# Plain stdout logging (fine for dev and containers)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

log = logging.getLogger("app")

app = FastAPI(title="Namu Namu AI", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(generate_router)
app.include_router(email_router)
app.include_router(auth_router)

_BODY_MESSAGES = {**INVALID_BODY_MESSAGES, "/api/send-email": EMAIL_BODY_MESSAGE}


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> PlainTextResponse:
    log.info("app.bad_request path=%s reason=%s", request.url.path, exc)
    return PlainTextResponse(str(exc), status_code=400)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> PlainTextResponse:
    log.info("app.malformed_body path=%s errors=%s", request.url.path, len(exc.errors()))
    message = _BODY_MESSAGES.get(request.url.path, "Malformed request body.")
    return PlainTextResponse(message, status_code=400)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> PlainTextResponse:
    log.error("app.service_error path=%s error=%s", request.url.path, exc)
    return PlainTextResponse("Internal Server Error", status_code=500)


@app.get("/health")
def health():
    return {"ok": True}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
