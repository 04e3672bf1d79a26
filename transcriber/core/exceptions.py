"""
Audio Transcriber exception hierarchy.

All server-side exceptions inherit from TranscriberError, enabling
centralized error handling in the API middleware layer.
"""

from datetime import UTC, datetime


class TranscriberError(Exception):
    """Base exception for all Audio Transcriber errors."""

    def __init__(
        self,
        error: str = "An unexpected error occurred",
        code: str = "TRANSCRIBER_ERROR",
        status_code: int = 500,
        details: str | None = None,
    ) -> None:
        self.error = error
        self.code = code
        self.status_code = status_code
        self.details = details
        self.timestamp = datetime.now(UTC).isoformat()
        super().__init__(error if details is None else f"{error}: {details}")


class NoAudioFileError(TranscriberError):
    """Raised when a transcription request carries no audio file."""

    def __init__(self) -> None:
        super().__init__(
            error="No audio file uploaded",
            code="NO_AUDIO_FILE",
            status_code=400,
        )


class InvalidAudioFileError(TranscriberError):
    """Raised when the uploaded file is not audio, or carries no bytes."""

    def __init__(self, error: str = "Invalid file type. Only audio files are allowed.") -> None:
        super().__init__(
            error=error,
            code="INVALID_AUDIO_FILE",
            status_code=400,
        )


class AudioTooLargeError(TranscriberError):
    """Raised when the uploaded file exceeds the gateway size cap."""

    def __init__(self, max_mb: int) -> None:
        super().__init__(
            error=f"File too large. Max size: {max_mb}MB",
            code="AUDIO_TOO_LARGE",
            status_code=413,
        )


class TranscriptionError(TranscriberError):
    """Raised when the transcription provider fails or returns malformed data."""

    def __init__(self, details: str | None = None) -> None:
        super().__init__(
            error="Transcription failed",
            code="TRANSCRIPTION_ERROR",
            status_code=500,
            details=details,
        )


class RecordNotFoundError(TranscriberError):
    """Raised when a transcript record ID does not exist."""

    def __init__(self, record_id: int) -> None:
        super().__init__(
            error=f"Transcription not found: {record_id}",
            code="RECORD_NOT_FOUND",
            status_code=404,
        )


class PersistenceError(TranscriberError):
    """Raised when the transcript store rejects a read or write."""

    def __init__(self, details: str | None = None) -> None:
        super().__init__(
            error="Database operation failed",
            code="PERSISTENCE_ERROR",
            status_code=500,
            details=details,
        )
