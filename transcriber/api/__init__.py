"""
API module - FastAPI transcription gateway.
"""
