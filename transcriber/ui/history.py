"""
History list - the persisted transcripts as the client shows them.

Reads, saves (with a best-effort duplicate check), and deletes records
through a :class:`TranscriptStore`.  Store failures never propagate to the
caller: they are logged and reported through ``notify``, and the displayed
list is left as it was.
"""

import logging
from collections.abc import Callable

from transcriber.core.exceptions import TranscriberError
from transcriber.core.models import TranscriptRecordView
from transcriber.services.storage.store import TranscriptStore

logger = logging.getLogger(__name__)

SAVE_OK_MESSAGE = "Transcription saved successfully!"
SAVE_FAILED_MESSAGE = "Failed to save transcription to database."
DELETE_FAILED_MESSAGE = "Failed to delete transcription."


class TranscriptHistory:
    """In-memory view of the transcript table.

    Args:
        store: Persistence provider for transcript records.
        notify: Called with a message the user must acknowledge
            (save result, persistence failures).
    """

    def __init__(
        self,
        store: TranscriptStore,
        notify: Callable[[str], None] | None = None,
    ) -> None:
        self._store = store
        self._notify = notify or (lambda _message: None)
        self.records: list[TranscriptRecordView] = []

    async def refresh(self) -> None:
        """Reload every record, most recent first; keep the old list on failure."""
        try:
            self.records = await self._store.list_records()
        except TranscriberError as exc:
            logger.error("Error fetching transcriptions: %s", exc)

    async def save(self, audio_name: str, transcription: str) -> bool:
        """Insert the pair unless an identical one is already stored.

        The existence check and the insert are separate store calls, so two
        clients saving the same pair at once can both insert it.

        Returns:
            True if a row was inserted.
        """
        try:
            existing = await self._store.list_pairs()
        except TranscriberError as exc:
            logger.error("Error checking for duplicate transcription: %s", exc)
            self._notify(SAVE_FAILED_MESSAGE)
            return False

        is_duplicate = any(
            name == audio_name and text == transcription for name, text in existing
        )
        if is_duplicate:
            logger.info("Duplicate transcription detected for %s. Skipping insert.", audio_name)
            return False

        try:
            await self._store.insert(audio_name, transcription)
        except TranscriberError as exc:
            logger.error("Error saving to database: %s", exc)
            self._notify(SAVE_FAILED_MESSAGE)
            return False

        await self.refresh()
        self._notify(SAVE_OK_MESSAGE)
        return True

    async def delete(self, record_id: int) -> bool:
        """Delete one record and drop it from ``records`` without a reload.

        Returns:
            True if the store deleted the row.
        """
        try:
            await self._store.delete(record_id)
        except TranscriberError as exc:
            logger.error("Error deleting transcription %d: %s", record_id, exc)
            self._notify(DELETE_FAILED_MESSAGE)
            return False

        self.records = [r for r in self.records if r.id != record_id]
        return True
