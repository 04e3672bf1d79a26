"""
Async HTTP client for the transcription gateway.

Uses a short-lived ``httpx.AsyncClient`` per call so it is safe to drive
from a fresh event loop on every Streamlit rerun.
"""

import logging

import httpx

from transcriber.ui.capture import AudioPayload

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """User-friendly gateway error with categorized message.

    Categories: "connection", "timeout", "http", "malformed", "network".
    """

    def __init__(self, message: str, category: str = "unknown") -> None:
        self.message = message
        self.category = category
        super().__init__(message)


class GatewayClient:
    """Thin async wrapper around httpx for calling the transcription gateway.

    Args:
        base_url: Base URL of the gateway, e.g. ``http://localhost:3030``.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport (``ASGITransport`` or
            ``MockTransport`` in tests).
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3030",
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Execute an HTTP request with user-friendly error handling.

        Raises:
            GatewayError: On connection, timeout, HTTP status, or network errors.
        """
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                resp = await client.request(method, path, **kwargs)
                resp.raise_for_status()
                return resp
        except httpx.ConnectError:
            raise GatewayError(
                "Transcription server is not running. "
                "Start it with: `transcriber-gateway`",
                category="connection",
            ) from None
        except httpx.TimeoutException:
            raise GatewayError(
                "Request timed out. The server may be overloaded.",
                category="timeout",
            ) from None
        except httpx.HTTPStatusError as exc:
            try:
                body = exc.response.json()
                detail = body.get("details") or body.get("error") or exc.response.text
            except (ValueError, AttributeError):
                detail = exc.response.text or str(exc)
            raise GatewayError(str(detail), category="http") from None
        except httpx.HTTPError as exc:
            raise GatewayError(f"Network error: {exc}", category="network") from None

    async def health_check(self) -> dict:
        return (await self._request("GET", "/")).json()

    async def check_connection(self) -> tuple[bool, str]:
        """Check if the gateway is reachable. Returns (ok, message)."""
        try:
            await self.health_check()
            return True, "Connected"
        except GatewayError as exc:
            return False, exc.message

    async def transcribe(self, payload: AudioPayload) -> str:
        """Upload ``payload`` as the ``audio`` form field and return its transcript.

        Raises:
            GatewayError: On any transport failure, non-2xx status, or a
                response body without a string ``transcript`` field.
        """
        resp = await self._request(
            "POST",
            "/transcribe",
            files={"audio": (payload.name, payload.data, payload.mimetype)},
        )
        try:
            body = resp.json()
        except ValueError:
            raise GatewayError("Gateway returned a non-JSON body", category="malformed") from None
        transcript = body.get("transcript") if isinstance(body, dict) else None
        if not isinstance(transcript, str):
            raise GatewayError("Gateway response has no transcript", category="malformed")
        logger.info("Transcription response for %s: %d chars", payload.name, len(transcript))
        return transcript
