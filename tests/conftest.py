"""Shared pytest fixtures for the Audio Transcriber test suite.

Provides a mock STT provider, sample audio, and in-memory database
fixtures used across unit and integration tests.
"""

import io
import math
import struct
import wave
from unittest.mock import AsyncMock

import pytest

# ---------------------------------------------------------------------------
# STT Fixtures
# ---------------------------------------------------------------------------


def provider_result(transcript: str) -> dict:
    """Build a minimal provider result carrying ``transcript``."""
    return {"results": {"channels": [{"alternatives": [{"transcript": transcript}]}]}}


@pytest.fixture
def mock_stt():
    """Create a mock STT provider for unit testing.

    Returns:
        AsyncMock: A mock implementing the BaseSTT interface whose
        ``transcribe`` returns a one-channel result saying "hello world".
    """
    from transcriber.services.transcription.base import BaseSTT

    stt = AsyncMock(spec=BaseSTT)
    stt.transcribe.return_value = provider_result("hello world")
    return stt


# ---------------------------------------------------------------------------
# Audio Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_wav_bytes():
    """Generate 0.25 seconds of 440Hz sine-wave audio as a WAV file (16kHz, 16-bit, mono).

    Returns:
        bytes: Complete WAV file contents.
    """
    sample_rate = 16000
    frequency = 440.0
    amplitude = 16000  # ~50% of max int16

    frames = b"".join(
        struct.pack("<h", int(amplitude * math.sin(2 * math.pi * frequency * i / sample_rate)))
        for i in range(sample_rate // 4)
    )
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(sample_rate)
        wf.writeframes(frames)
    return buf.getvalue()


# ---------------------------------------------------------------------------
# Database Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
async def db_engine():
    """Create an in-memory SQLite async engine with tables, dispose after test."""
    from sqlalchemy.ext.asyncio import create_async_engine

    from transcriber.services.storage.database import init_db

    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine):
    """Yield an AsyncSession bound to the test engine; rolls back after test."""
    from sqlalchemy.ext.asyncio import async_sessionmaker

    factory = async_sessionmaker(db_engine, expire_on_commit=False)
    async with factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def repository(db_session):
    """Return a TranscriptionRepository bound to the test session."""
    from transcriber.services.storage.repository import TranscriptionRepository

    return TranscriptionRepository(db_session)


@pytest.fixture
def sql_store(db_engine):
    """SQLTranscriptStore that runs against the in-memory test engine."""
    from transcriber.services.storage import database
    from transcriber.services.storage.store import SQLTranscriptStore

    database.bind_engine(db_engine)
    yield SQLTranscriptStore()
    database.reset_engine()


# ---------------------------------------------------------------------------
# Client-side Fixtures
# ---------------------------------------------------------------------------


class InMemoryStore:
    """TranscriptStore double that keeps rows in a list and counts calls.

    Operations named in ``failing`` raise PersistenceError instead.
    """

    def __init__(self) -> None:
        self.rows: list[tuple[int, str, str]] = []
        self.insert_calls: list[tuple[str, str]] = []
        self.delete_calls: list[int] = []
        self.failing: set[str] = set()
        self._next_id = 1

    def _check(self, operation: str) -> None:
        from transcriber.core.exceptions import PersistenceError

        if operation in self.failing:
            raise PersistenceError(f"{operation} unavailable")

    async def list_records(self):
        from transcriber.core.models import TranscriptRecordView

        self._check("list_records")
        return [
            TranscriptRecordView(id=rid, audio_name=name, transcription=text)
            for rid, name, text in sorted(self.rows, reverse=True)
        ]

    async def list_pairs(self):
        self._check("list_pairs")
        return [(name, text) for _, name, text in self.rows]

    async def insert(self, audio_name, transcription):
        from transcriber.core.models import TranscriptRecordView

        self.insert_calls.append((audio_name, transcription))
        self._check("insert")
        rid = self._next_id
        self._next_id += 1
        self.rows.append((rid, audio_name, transcription))
        return TranscriptRecordView(id=rid, audio_name=audio_name, transcription=transcription)

    async def delete(self, record_id):
        from transcriber.core.exceptions import RecordNotFoundError

        self.delete_calls.append(record_id)
        self._check("delete")
        if not any(rid == record_id for rid, _, _ in self.rows):
            raise RecordNotFoundError(record_id)
        self.rows = [row for row in self.rows if row[0] != record_id]


@pytest.fixture
def memory_store():
    """Empty in-memory transcript store."""
    return InMemoryStore()


@pytest.fixture
def alerts():
    """List that collects every message passed to ``notify``."""
    return []


@pytest.fixture
def history(memory_store, alerts):
    """TranscriptHistory over the in-memory store, recording alerts."""
    from transcriber.ui.history import TranscriptHistory

    return TranscriptHistory(memory_store, notify=alerts.append)
