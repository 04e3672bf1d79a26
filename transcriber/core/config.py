"""
Application configuration via pydantic-settings.

Loads values from .env file with sensible defaults for local development.
Use ``get_settings()`` to obtain the cached singleton instance.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Audio Transcriber settings loaded from environment / .env file.

    All settings can be overridden via environment variables or a `.env` file.
    Field names map directly to env var names (case-insensitive).

    Attributes:
        stt_provider: Transcription backend ("deepgram" or "local").
        database_url: Async SQLAlchemy connection string for the transcript table.
        gateway_url: Base URL the client uses to reach the transcription gateway.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Silently ignore unrecognized env vars
    )

    # --- Transcription provider ---
    # "deepgram" for the hosted API, "local" for faster-whisper
    stt_provider: str = "deepgram"

    # Deepgram (hosted STT) settings
    deepgram_api_key: str = ""  # Required when stt_provider="deepgram"
    deepgram_base_url: str = "https://api.deepgram.com/v1"
    deepgram_model: str = "whisper-medium"
    deepgram_language: str = "en"  # Empty = let the provider detect
    deepgram_smart_format: bool = True

    # faster-whisper (local STT) settings
    whisper_model: str = "base"  # Model size: tiny, base, small, medium, large-v3

    # --- Gateway ---
    app_host: str = "0.0.0.0"  # Bind address for the FastAPI server
    app_port: int = 3030
    cors_origins: list[str] = [
        "http://localhost:8501",  # Streamlit
        "http://localhost:3000",  # Dev frontend
    ]
    max_upload_mb: int = 20  # Hard cap enforced by the gateway

    # --- Client ---
    gateway_url: str = "http://localhost:3030"
    client_max_upload_mb: int = 5  # Checked before anything is uploaded
    request_timeout: float = 120.0  # Seconds; transcription of long clips is slow

    # --- Storage ---
    # Any async SQLAlchemy URL, e.g. postgresql+asyncpg://... for a hosted table
    database_url: str = "sqlite+aiosqlite:///data/transcriptions.db"

    # --- Application ---
    log_level: str = "INFO"  # Python logging level


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings singleton.

    Uses ``functools.lru_cache`` so the .env file is read only once.
    Subsequent calls return the same ``Settings`` instance.

    Returns:
        Settings: The application-wide configuration object.
    """
    return Settings()
