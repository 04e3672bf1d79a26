"""
CRUD repository for the ``audioTranscription`` table.

``TranscriptionRepository`` receives an ``AsyncSession`` and provides all
data-access methods.  It calls ``flush()`` rather than ``commit()`` so
that transaction boundaries are controlled by the caller (typically
:func:`get_session`).
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from transcriber.core.exceptions import RecordNotFoundError
from transcriber.services.storage.models_db import TranscriptRecord

logger = logging.getLogger(__name__)


class TranscriptionRepository:
    """Data-access layer for transcript records.

    Args:
        session: An active SQLAlchemy ``AsyncSession``.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_transcriptions(self) -> list[TranscriptRecord]:
        """Return every record, most recent (highest id) first."""
        stmt = select(TranscriptRecord).order_by(TranscriptRecord.id.desc())
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def list_pairs(self) -> list[tuple[str, str]]:
        """Return the (audio_name, transcription) pair of every record."""
        stmt = select(TranscriptRecord.audio_name, TranscriptRecord.transcription)
        result = await self._session.execute(stmt)
        return [(name, text) for name, text in result.all()]

    async def create_transcription(self, audio_name: str, transcription: str) -> TranscriptRecord:
        """Insert and return a new record."""
        record = TranscriptRecord(audio_name=audio_name, transcription=transcription)
        self._session.add(record)
        await self._session.flush()
        logger.debug("Inserted transcription %d (%s)", record.id, audio_name)
        return record

    async def delete_transcription(self, record_id: int) -> None:
        """Delete a record by ID.

        Raises:
            RecordNotFoundError: If no row has the given ID.
        """
        result = await self._session.execute(
            delete(TranscriptRecord).where(TranscriptRecord.id == record_id)
        )
        if result.rowcount == 0:
            raise RecordNotFoundError(record_id)
        logger.debug("Deleted transcription %d", record_id)
