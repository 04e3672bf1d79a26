"""
Transcription endpoint.

Accepts one audio file per request under the ``audio`` form field,
validates it, and forwards the bytes to the configured STT provider.
The gateway keeps no state between requests and never retries.
"""

import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, File, UploadFile

from transcriber.core.config import get_settings
from transcriber.core.exceptions import (
    AudioTooLargeError,
    InvalidAudioFileError,
    NoAudioFileError,
    TranscriptionError,
)
from transcriber.core.models import ErrorResponse, TranscriptResponse
from transcriber.services.transcription import BaseSTT, create_stt, extract_transcript

logger = logging.getLogger(__name__)

router = APIRouter(tags=["transcription"])

AUDIO_FIELD = "audio"


@lru_cache
def get_stt() -> BaseSTT:
    """Return the process-wide STT provider selected by ``stt_provider``."""
    return create_stt(get_settings().stt_provider)


@router.post(
    "/transcribe",
    response_model=TranscriptResponse,
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def transcribe(
    audio: UploadFile | str | None = File(None),
    stt: BaseSTT = Depends(get_stt),
) -> TranscriptResponse:
    """Transcribe an uploaded audio clip and return its transcript."""
    # A plain text part under the field name carries no file either
    if audio is None or isinstance(audio, str):
        logger.warning("Transcription request without an '%s' file", AUDIO_FIELD)
        raise NoAudioFileError()

    mimetype = audio.content_type or ""
    if not mimetype.startswith("audio/"):
        logger.warning("Rejected %s: content type %r", audio.filename, mimetype)
        raise InvalidAudioFileError()

    max_mb = get_settings().max_upload_mb
    max_bytes = max_mb * 1024 * 1024
    if audio.size is not None and audio.size > max_bytes:
        raise AudioTooLargeError(max_mb)

    data = await audio.read()
    if len(data) > max_bytes:
        raise AudioTooLargeError(max_mb)
    if not data:
        raise InvalidAudioFileError("Invalid audio file")

    logger.info("Transcribing %s (%s, %d bytes)", audio.filename, mimetype, len(data))
    try:
        result = await stt.transcribe(data, mimetype)
    except TranscriptionError:
        raise
    except Exception as exc:
        logger.error("STT provider failed on %s: %s", audio.filename, exc)
        raise TranscriptionError(str(exc)) from exc
    transcript = extract_transcript(result)
    return TranscriptResponse(transcript=transcript)
