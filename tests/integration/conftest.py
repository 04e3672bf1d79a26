"""Integration test fixtures for Audio Transcriber.

Wires the client workflow to the real FastAPI gateway (in-process via
``ASGITransport``) and to the SQL store on an in-memory SQLite database.
Only the STT provider is mocked.
"""

import httpx
import pytest

from transcriber.api.app import create_app
from transcriber.api.routes.transcription import get_stt
from transcriber.ui.gateway_client import GatewayClient
from transcriber.ui.history import TranscriptHistory
from transcriber.ui.workflow import TranscriptionWorkflow


@pytest.fixture
def app(mock_stt):
    """Create a fresh FastAPI application backed by the mock STT provider."""
    app = create_app()
    app.dependency_overrides[get_stt] = lambda: mock_stt
    return app


@pytest.fixture
def gateway_client(app):
    """GatewayClient that talks to the in-process app."""
    return GatewayClient(base_url="http://test", transport=httpx.ASGITransport(app=app))


@pytest.fixture
def notices():
    return []


@pytest.fixture
def sql_history(sql_store, notices):
    """History list persisting to the in-memory SQL database."""
    return TranscriptHistory(sql_store, notify=notices.append)


@pytest.fixture
def workflow(gateway_client, sql_history):
    return TranscriptionWorkflow(gateway_client, sql_history, max_upload_mb=5)
