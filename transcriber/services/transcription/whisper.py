"""Local STT implementation using faster-whisper.

Decodes the uploaded clip in memory and shapes the output like a hosted
provider result, so the gateway extracts the transcript the same way for
every provider. The WhisperModel is loaded lazily and cached at module
level to avoid repeated initialization overhead.
"""

import asyncio
import io
import logging
import math

from faster_whisper import WhisperModel

from transcriber.core.config import get_settings
from transcriber.core.exceptions import TranscriptionError
from transcriber.services.transcription.base import BaseSTT

logger = logging.getLogger(__name__)

_model_cache: WhisperModel | None = None


class WhisperSTT(BaseSTT):
    """Speech-to-text provider using faster-whisper (CTranslate2).

    Args:
        model_size: Whisper model size (tiny, base, small, medium, large-v3).
        device: Computation device ("cpu" or "cuda").
        compute_type: CTranslate2 compute type ("int8", "float16", etc.).
        settings: Optional Settings instance (defaults to get_settings()).
    """

    def __init__(
        self,
        model_size: str | None = None,
        device: str = "cpu",
        compute_type: str = "int8",
        settings=None,
    ) -> None:
        self._settings = settings or get_settings()
        self._model_size = model_size or self._settings.whisper_model
        self._device = device
        self._compute_type = compute_type

    def _get_model(self) -> WhisperModel:
        """Return the cached WhisperModel, loading it on first use."""
        global _model_cache  # noqa: PLW0603
        if _model_cache is None:
            logger.info(
                "Loading Whisper model: %s (device=%s, compute=%s)",
                self._model_size,
                self._device,
                self._compute_type,
            )
            _model_cache = WhisperModel(
                self._model_size,
                device=self._device,
                compute_type=self._compute_type,
            )
        return _model_cache

    def _run_transcription(self, audio: bytes, language: str | None = None) -> tuple:
        """Run synchronous transcription (CPU-bound).

        Must be called via asyncio.to_thread(). The segment iterator is
        materialized into a list inside this function to avoid CTranslate2
        thread-safety issues.
        """
        model = self._get_model()
        segments_iter, info = model.transcribe(
            io.BytesIO(audio),
            language=language,
            beam_size=5,
            vad_filter=True,
        )
        segments = list(segments_iter)
        return segments, info

    @staticmethod
    def _logprob_to_confidence(avg_logprob: float) -> float:
        """Convert average log probability to a 0-1 confidence score."""
        return max(0.0, min(1.0, math.exp(avg_logprob)))

    async def transcribe(self, audio: bytes, mimetype: str, **kwargs) -> dict:
        """Transcribe an in-memory clip; ``mimetype`` is only logged (ffmpeg sniffs it)."""
        logger.debug("Transcribing %d bytes of %s locally", len(audio), mimetype)
        try:
            segments, info = await asyncio.to_thread(
                self._run_transcription,
                audio,
                language=kwargs.get("language"),
            )
        except Exception as exc:
            raise TranscriptionError(f"Whisper transcription failed: {exc}") from exc

        texts = [seg.text.strip() for seg in segments if seg.text.strip()]
        confidence = 0.0
        if segments:
            avg_logprob = sum(s.avg_logprob for s in segments) / len(segments)
            confidence = self._logprob_to_confidence(avg_logprob)

        return {
            "metadata": {
                "model": self._model_size,
                "duration": info.duration,
                "language": info.language,
            },
            "results": {
                "channels": [
                    {
                        "alternatives": [
                            {"transcript": " ".join(texts), "confidence": confidence}
                        ]
                    }
                ]
            },
        }
