"""
Services module - transcription providers and transcript storage.
"""
