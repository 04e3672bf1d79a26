"""
Abstract base class for Speech-to-Text providers.

All STT implementations (Deepgram API, local faster-whisper) must implement
this interface, enabling provider-agnostic transcription in the gateway.
"""

from abc import ABC, abstractmethod

from transcriber.core.exceptions import TranscriptionError


class BaseSTT(ABC):
    """Interface that every STT provider must implement."""

    @abstractmethod
    async def transcribe(self, audio: bytes, mimetype: str, **kwargs) -> dict:
        """Transcribe a complete audio clip.

        Args:
            audio: Raw bytes of the uploaded file, in its original container.
            mimetype: MIME type of ``audio`` (e.g. ``audio/webm``).
            **kwargs: Provider-specific options (model, language, etc.).

        Returns:
            Provider result dict shaped like
            ``{"results": {"channels": [{"alternatives": [{"transcript": ...}]}]}}``.

        Raises:
            TranscriptionError: If the provider rejects the request.
        """


def extract_transcript(result: object) -> str:
    """Return the first alternative transcript of the first channel.

    Raises:
        TranscriptionError: If ``result`` lacks the channel/alternative structure.
    """
    if not isinstance(result, dict) or not result.get("results"):
        raise TranscriptionError("Invalid provider response: no results")
    try:
        transcript = result["results"]["channels"][0]["alternatives"][0]["transcript"]
    except (KeyError, IndexError, TypeError) as exc:
        raise TranscriptionError(f"Invalid provider response: missing {exc}") from exc
    if not isinstance(transcript, str):
        raise TranscriptionError("Invalid provider response: transcript is not text")
    return transcript
