"""
Pydantic v2 request / response models shared by the gateway and the client.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from transcriber import __version__

# ---------------------------------------------------------------------------
# System
# ---------------------------------------------------------------------------


class RootResponse(BaseModel):
    """GET / liveness response."""

    message: str = "Server is running successfully!"


class HealthResponse(BaseModel):
    """GET /health response."""

    status: str = "ok"
    version: str = __version__
    timestamp: datetime


# ---------------------------------------------------------------------------
# Transcription
# ---------------------------------------------------------------------------


class TranscriptResponse(BaseModel):
    """POST /transcribe success body."""

    transcript: str


class ErrorResponse(BaseModel):
    """Error envelope returned by every failing gateway request."""

    error: str
    details: str | None = None
    code: str
    timestamp: str


# ---------------------------------------------------------------------------
# Transcript records
# ---------------------------------------------------------------------------


class TranscriptRecordView(BaseModel):
    """A persisted (audioName, transcription) row as the history list shows it."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    audio_name: str = Field(alias="audioName")
    transcription: str = ""
