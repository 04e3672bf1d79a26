"""
Audio capture abstraction and the audio payload it produces.

The workflow only knows "start capture / receive chunk / stop".  How the
host delivers audio (browser widget, sound card, test double) lives in an
``AudioCapture`` subclass.
"""

import base64
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

ChunkCallback = Callable[[bytes], None]


class CaptureError(Exception):
    """Raised when the capture device cannot start (no device, permission denied)."""


@dataclass(frozen=True)
class AudioPayload:
    """Audio staged for transcription, from an upload or a finished recording."""

    name: str
    data: bytes
    mimetype: str

    @property
    def size(self) -> int:
        return len(self.data)


def to_playback_url(payload: AudioPayload) -> str:
    """Return a self-contained ``data:`` URL for previewing ``payload``."""
    encoded = base64.b64encode(payload.data).decode("ascii")
    return f"data:{payload.mimetype};base64,{encoded}"


class AudioCapture(ABC):
    """A source of recorded audio chunks.

    Subclasses set ``mimetype`` and ``extension`` to describe the container
    their chunks belong to; concatenated chunks must form a playable file.
    """

    mimetype: str = "audio/webm"
    extension: str = "webm"

    @abstractmethod
    async def start(self, on_chunk: ChunkCallback) -> None:
        """Begin capturing and deliver chunks to ``on_chunk``.

        Raises:
            CaptureError: If the device is unavailable or access is denied.
        """

    @abstractmethod
    async def stop(self) -> None:
        """End capture; every pending chunk is delivered before this returns."""


class WidgetCapture(AudioCapture):
    """Capture backed by a finished clip from a recorder widget.

    ``st.audio_input`` records in the browser and hands over a complete WAV
    file; this adapter replays it as a single chunk when capture stops.
    """

    mimetype = "audio/wav"
    extension = "wav"

    def __init__(self, clip: bytes | None) -> None:
        self._clip = clip
        self._on_chunk: ChunkCallback | None = None

    async def start(self, on_chunk: ChunkCallback) -> None:
        if self._clip is None:
            raise CaptureError("No microphone recording available")
        self._on_chunk = on_chunk

    async def stop(self) -> None:
        if self._on_chunk is not None and self._clip:
            self._on_chunk(self._clip)
        logger.debug("Widget capture delivered %d bytes", len(self._clip or b""))
        self._on_chunk = None
