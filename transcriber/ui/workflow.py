"""
Recording / upload / transcribe / save workflow.

The workflow is always in exactly one of three states::

    Idle ──start_recording──> Recording ──stop_recording──> Idle (with audio)
    Idle ──select_file──────────────────────────────────> Idle (with audio)
    Idle (with audio) ──transcribe──> Transcribing ──> Idle (with result)

Staged audio, its preview URL, the result text and the error message are
kept next to the state and survive transitions until ``reset()``.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from transcriber.ui.capture import (
    AudioCapture,
    AudioPayload,
    CaptureError,
    to_playback_url,
)
from transcriber.ui.gateway_client import GatewayClient, GatewayError
from transcriber.ui.history import TranscriptHistory

logger = logging.getLogger(__name__)

NO_TRANSCRIPTION_YET = "No Transcription Yet."
PROCESSING_MESSAGE = "Processing..."
NO_TRANSCRIPT_FOUND = "No transcription found."
TRANSCRIPTION_FAILED_MESSAGE = "Error transcribing audio."

INVALID_TYPE_MESSAGE = "Invalid file type. Please upload an audio file."
RECORDING_FAILED_MESSAGE = "Failed to start recording."
NOTHING_RECORDED_MESSAGE = "No audio was captured."
NO_AUDIO_MESSAGE = "Please upload or record an audio file first."
BUSY_RECORDING_MESSAGE = "Stop the recording first."


@dataclass(frozen=True)
class Idle:
    """Nothing in progress."""


@dataclass(frozen=True)
class Recording:
    """Capture running since ``started_at_ms`` (epoch milliseconds)."""

    started_at_ms: int


@dataclass(frozen=True)
class Transcribing:
    """One transcription request in flight."""


WorkflowState = Idle | Recording | Transcribing


def _epoch_millis() -> int:
    return time.time_ns() // 1_000_000


class TranscriptionWorkflow:
    """Client-side state machine driving capture, upload and save.

    Args:
        gateway: Client for the transcription gateway.
        history: History list that persists finished transcripts.
        capture: Default capture device for ``start_recording``.
        max_upload_mb: Size cap checked on file selection.
        clock: Returns the current time in epoch milliseconds.
    """

    def __init__(
        self,
        gateway: GatewayClient,
        history: TranscriptHistory,
        capture: AudioCapture | None = None,
        max_upload_mb: int = 5,
        clock: Callable[[], int] = _epoch_millis,
    ) -> None:
        self.gateway = gateway
        self._history = history
        self._capture = capture
        self._active_capture: AudioCapture | None = None
        self._chunks: list[bytes] = []
        self._max_upload_mb = max_upload_mb
        self._clock = clock

        self.state: WorkflowState = Idle()
        self.pending_audio: AudioPayload | None = None
        self.playback_url: str | None = None
        self.result: str = NO_TRANSCRIPTION_YET
        self.error: str = ""

    @property
    def is_recording(self) -> bool:
        return isinstance(self.state, Recording)

    @property
    def is_transcribing(self) -> bool:
        return isinstance(self.state, Transcribing)

    def _stage(self, payload: AudioPayload) -> None:
        self.pending_audio = payload
        self.playback_url = to_playback_url(payload)

    # -- input --

    def select_file(self, payload: AudioPayload) -> bool:
        """Stage an uploaded file after checking its type and size.

        Returns:
            True if the file was accepted. On rejection ``error`` explains why
            and the previously staged audio is kept.
        """
        if self.is_recording:
            self.error = BUSY_RECORDING_MESSAGE
            return False
        if not payload.mimetype.startswith("audio/"):
            self.error = INVALID_TYPE_MESSAGE
            return False
        if payload.size > self._max_upload_mb * 1024 * 1024:
            self.error = f"File size too large. Max limit is {self._max_upload_mb}MB."
            return False

        self.error = ""
        self._stage(payload)
        return True

    async def start_recording(self, capture: AudioCapture | None = None) -> bool:
        """Start capturing from ``capture`` (or the default device).

        Returns:
            True if the workflow is now recording.
        """
        if not isinstance(self.state, Idle):
            logger.debug("start_recording ignored in state %s", self.state)
            return False

        device = capture or self._capture
        if device is None:
            self.error = RECORDING_FAILED_MESSAGE
            return False

        chunks: list[bytes] = []

        def on_chunk(data: bytes) -> None:
            if data:
                chunks.append(data)

        started_at = self._clock()
        try:
            await device.start(on_chunk)
        except CaptureError as exc:
            logger.error("Error starting recording: %s", exc)
            self.error = RECORDING_FAILED_MESSAGE
            return False

        self._active_capture = device
        self._chunks = chunks
        self.state = Recording(started_at_ms=started_at)
        return True

    async def stop_recording(self) -> AudioPayload | None:
        """Stop capturing and stage the recorded clip.

        Returns:
            The staged payload, or None if nothing was recorded.
        """
        if not isinstance(self.state, Recording) or self._active_capture is None:
            return None

        device = self._active_capture
        try:
            await device.stop()
        finally:
            self._active_capture = None
            self.state = Idle()
        stopped_at = self._clock()

        data = b"".join(self._chunks)
        self._chunks = []
        if not data:
            self.error = NOTHING_RECORDED_MESSAGE
            return None

        payload = AudioPayload(
            name=f"Recorded_Audio_{stopped_at}.{device.extension}",
            data=data,
            mimetype=device.mimetype,
        )
        self._stage(payload)
        return payload

    # -- transcription --

    async def transcribe(self) -> None:
        """Send the staged audio to the gateway and save the transcript.

        A call made while another one is in flight does nothing.
        """
        if self.is_transcribing:
            logger.debug("Transcription already in flight; ignoring request")
            return
        if self.is_recording:
            self.error = BUSY_RECORDING_MESSAGE
            return
        payload = self.pending_audio
        if payload is None:
            self.error = NO_AUDIO_MESSAGE
            return

        self.state = Transcribing()
        self.result = PROCESSING_MESSAGE
        try:
            transcript = await self.gateway.transcribe(payload)
        except GatewayError as exc:
            logger.error("Transcription error (%s): %s", exc.category, exc.message)
            self.result = TRANSCRIPTION_FAILED_MESSAGE
            return
        finally:
            self.state = Idle()

        self.result = transcript or NO_TRANSCRIPT_FOUND
        await self._history.save(payload.name, self.result)

    def reset(self) -> None:
        """Drop staged audio, result and error, whatever the current state."""
        self.pending_audio = None
        self.playback_url = None
        self.result = NO_TRANSCRIPTION_YET
        self.error = ""
