"""Audio Transcriber - record or upload audio, transcribe it, keep a history."""

__version__ = "0.1.0"
