"""
Storage module - transcript table, repository, and client-facing store.
"""

from transcriber.services.storage.database import (
    Base,
    bind_engine,
    configure_engine,
    get_engine,
    get_session,
    init_db,
    reset_engine,
)
from transcriber.services.storage.models_db import TranscriptRecord
from transcriber.services.storage.repository import TranscriptionRepository
from transcriber.services.storage.store import SQLTranscriptStore, TranscriptStore

__all__ = [
    "Base",
    "SQLTranscriptStore",
    "TranscriptRecord",
    "TranscriptStore",
    "TranscriptionRepository",
    "bind_engine",
    "configure_engine",
    "get_engine",
    "get_session",
    "init_db",
    "reset_engine",
]
