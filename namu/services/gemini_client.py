from __future__ import annotations

import base64
import binascii
import logging
from typing import AsyncIterator, Optional, Protocol, Sequence, Union

from google import genai
from google.genai import errors, types

from namu.services.errors import (
    GeminiConfigurationError,
    GenerationError,
    RateLimitedError,
    ValidationError,
)

log = logging.getLogger("gemini")

Contents = Union[str, Sequence[Union[str, types.Part, types.Content]]]


class TextGenerator(Protocol):
    def stream_text(self, contents: Contents) -> AsyncIterator[str]: ...


def image_part(mime_type: str, base64_data: str) -> types.Part:
    """Inline image data for a multimodal prompt."""
    try:
        data = base64.b64decode(base64_data, validate=True)
    except (binascii.Error, ValueError) as decode_error:
        raise ValidationError("Image data is not valid base64.") from decode_error
    return types.Part.from_bytes(data=data, mime_type=mime_type)


def user_content(*parts: types.Part) -> types.Content:
    return types.Content(role="user", parts=list(parts))


class GeminiClient:
    def __init__(self, api_key: str, model_name: str = "gemini-2.5-flash") -> None:
        self.api_key = api_key
        self.model_name = model_name
        self._client: Optional[genai.Client] = None

    def _configure_api(self) -> genai.Client:
        if not self.api_key:
            raise GeminiConfigurationError("Missing Google API key.")
        return genai.Client(api_key=self.api_key)

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            self._client = self._configure_api()
        return self._client

    async def stream_text(self, contents: Contents) -> AsyncIterator[str]:
        """
        Yield the text deltas of one streamed generation, in order.

        The client and the remote call are only set up on the first iteration,
        so a missing key or a failure to start the generation surfaces there.
        """
        try:
            response_stream = await self.client.aio.models.generate_content_stream(
                model=self.model_name,
                contents=contents,
            )
            async for chunk in response_stream:
                text = chunk.text
                if text:
                    yield text
        except errors.APIError as err:
            status_code = getattr(err, "code", None)
            message = str(err)
            if status_code == 429 or "RESOURCE_EXHAUSTED" in message:
                raise RateLimitedError("Gemini API rate limit reached.") from err
            raise GenerationError(f"Gemini generation failed: {message}") from err
