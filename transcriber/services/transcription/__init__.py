"""
Transcription module - Speech-to-text abstraction layer.

Factory function for creating STT instances based on provider configuration.
"""

from .base import BaseSTT, extract_transcript

__all__ = ["BaseSTT", "create_stt", "extract_transcript"]


def create_stt(provider: str, **kwargs) -> BaseSTT:
    """
    Factory function to create STT instance based on provider.

    Args:
        provider: STT provider name ("deepgram", "whisper"/"local")
        **kwargs: Provider-specific configuration

    Returns:
        BaseSTT implementation instance

    Raises:
        ValueError: If provider is unknown
    """
    if provider == "deepgram":
        from .deepgram import DeepgramSTT
        return DeepgramSTT(**kwargs)
    elif provider == "whisper" or provider == "local":
        from .whisper import WhisperSTT
        return WhisperSTT(**kwargs)
    else:
        raise ValueError(f"Unknown STT provider: {provider}")
