"""
Transcript store - the persistence provider as the client sees it.

``TranscriptStore`` is the narrow interface the history list depends on:
ordered select, pair scan, insert, delete by id.  ``SQLTranscriptStore``
backs it with the async SQLAlchemy repository, one transaction per call.
"""

from abc import ABC, abstractmethod

from sqlalchemy.exc import SQLAlchemyError

from transcriber.core.exceptions import PersistenceError
from transcriber.core.models import TranscriptRecordView
from transcriber.services.storage.database import get_session
from transcriber.services.storage.repository import TranscriptionRepository


class TranscriptStore(ABC):
    """Interface every transcript store must implement."""

    @abstractmethod
    async def list_records(self) -> list[TranscriptRecordView]:
        """Return all records ordered by id descending."""

    @abstractmethod
    async def list_pairs(self) -> list[tuple[str, str]]:
        """Return every (audio_name, transcription) pair."""

    @abstractmethod
    async def insert(self, audio_name: str, transcription: str) -> TranscriptRecordView:
        """Insert one record and return it."""

    @abstractmethod
    async def delete(self, record_id: int) -> None:
        """Delete the record with the given id."""


class SQLTranscriptStore(TranscriptStore):
    """``TranscriptStore`` backed by :class:`TranscriptionRepository`.

    Database driver errors are re-raised as :class:`PersistenceError`;
    :class:`RecordNotFoundError` from the repository passes through.
    """

    async def list_records(self) -> list[TranscriptRecordView]:
        try:
            async with get_session() as session:
                records = await TranscriptionRepository(session).list_transcriptions()
        except SQLAlchemyError as exc:
            raise PersistenceError(str(exc)) from exc
        return [_to_view(r) for r in records]

    async def list_pairs(self) -> list[tuple[str, str]]:
        try:
            async with get_session() as session:
                return await TranscriptionRepository(session).list_pairs()
        except SQLAlchemyError as exc:
            raise PersistenceError(str(exc)) from exc

    async def insert(self, audio_name: str, transcription: str) -> TranscriptRecordView:
        try:
            async with get_session() as session:
                record = await TranscriptionRepository(session).create_transcription(
                    audio_name, transcription
                )
        except SQLAlchemyError as exc:
            raise PersistenceError(str(exc)) from exc
        return _to_view(record)

    async def delete(self, record_id: int) -> None:
        try:
            async with get_session() as session:
                await TranscriptionRepository(session).delete_transcription(record_id)
        except SQLAlchemyError as exc:
            raise PersistenceError(str(exc)) from exc


def _to_view(record) -> TranscriptRecordView:
    """Convert an ORM ``TranscriptRecord`` to its pydantic view."""
    return TranscriptRecordView.model_validate(record)
