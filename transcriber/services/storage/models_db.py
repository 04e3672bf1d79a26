"""
SQLAlchemy ORM model for the ``audioTranscription`` table.

Column names keep the camelCase spelling of the hosted table so existing
rows stay readable; Python attributes use snake_case.
"""

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from transcriber.services.storage.database import Base


class TranscriptRecord(Base):
    """One transcribed audio clip."""

    __tablename__ = "audioTranscription"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    audio_name: Mapped[str] = mapped_column("audioName", Text, default="")
    transcription: Mapped[str] = mapped_column(Text, default="")

    def __repr__(self) -> str:
        return f"<TranscriptRecord id={self.id} audio_name={self.audio_name!r}>"
