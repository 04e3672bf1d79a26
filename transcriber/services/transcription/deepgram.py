"""
Deepgram pre-recorded transcription over its REST API.

Sends the uploaded bytes unchanged with their MIME type as ``Content-Type``
and returns Deepgram's JSON result as-is.  One attempt per request: a
provider failure surfaces as a single :class:`TranscriptionError`.
"""

import logging

import httpx

from transcriber.core.config import get_settings
from transcriber.core.exceptions import TranscriptionError
from transcriber.services.transcription.base import BaseSTT

logger = logging.getLogger(__name__)


class DeepgramSTT(BaseSTT):
    """Speech-to-text provider using Deepgram's ``/listen`` endpoint.

    Args:
        api_key: Deepgram API key (falls back to settings).
        base_url: API root, e.g. ``https://api.deepgram.com/v1``.
        model: Deepgram model name (``whisper-medium`` by default).
        language: Language hint; empty string lets Deepgram detect it.
        smart_format: Ask Deepgram for punctuation and number formatting.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        language: str | None = None,
        smart_format: bool | None = None,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self._api_key = api_key if api_key is not None else settings.deepgram_api_key
        self._base_url = (base_url or settings.deepgram_base_url).rstrip("/")
        self._model = model or settings.deepgram_model
        self._language = language if language is not None else settings.deepgram_language
        self._smart_format = (
            smart_format if smart_format is not None else settings.deepgram_smart_format
        )
        self._timeout = timeout
        self._transport = transport

    def _params(self, **kwargs) -> dict[str, str]:
        params = {
            "model": kwargs.get("model") or self._model,
            "smart_format": "true" if kwargs.get("smart_format", self._smart_format) else "false",
        }
        language = kwargs.get("language", self._language)
        if language:
            params["language"] = language
        return params

    async def transcribe(self, audio: bytes, mimetype: str, **kwargs) -> dict:
        """Send ``audio`` to Deepgram and return the parsed JSON result."""
        if not self._api_key:
            raise TranscriptionError("DEEPGRAM_API_KEY is not configured")

        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                resp = await client.post(
                    "/listen",
                    params=self._params(**kwargs),
                    headers={
                        "Authorization": f"Token {self._api_key}",
                        "Content-Type": mimetype,
                    },
                    content=audio,
                )
                resp.raise_for_status()
                return resp.json()
        except httpx.HTTPStatusError as exc:
            try:
                detail = exc.response.json().get("err_msg", exc.response.text)
            except (ValueError, AttributeError):
                detail = exc.response.text or str(exc)
            logger.error("Deepgram returned %d: %s", exc.response.status_code, detail)
            raise TranscriptionError(
                f"Deepgram returned {exc.response.status_code}: {detail}"
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("Deepgram request failed (%s): %s", self._base_url, exc)
            raise TranscriptionError(f"Deepgram request failed: {exc}") from exc
        except ValueError as exc:
            logger.error("Deepgram returned a non-JSON body: %s", exc)
            raise TranscriptionError("Deepgram returned a non-JSON body") from exc
