"""Tests for the transcription gateway HTTP surface.

Exercises the FastAPI app through an async HTTP client: liveness and
health checks, CORS, upload validation (missing file, wrong type, empty,
oversize), transcript extraction on provider success, and the 500
envelope on provider failure or malformed provider output.
"""

from types import SimpleNamespace
from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient

from transcriber.api.app import create_app
from transcriber.api.routes.transcription import get_stt
from transcriber.core.exceptions import TranscriptionError


@pytest.fixture
def app(mock_stt):
    """Create a fresh FastAPI application with the mock STT provider injected."""
    app = create_app()
    app.dependency_overrides[get_stt] = lambda: mock_stt
    return app


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


def _upload(data: bytes, mimetype: str = "audio/wav", name: str = "clip.wav") -> dict:
    return {"audio": (name, data, mimetype)}


# ---------------------------------------------------------------------------
# Liveness / health
# ---------------------------------------------------------------------------


async def test_root_returns_message(client):
    """GET / returns 200 with a running message."""
    resp = await client.get("/")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Server is running successfully!"}


async def test_health_returns_200(client):
    """GET /health returns 200 with status, version, and timestamp."""
    resp = await client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["version"] == "0.1.0"
    assert "timestamp" in body


async def test_cors_allows_streamlit_origin(client):
    """Streamlit's default origin (localhost:8501) is in the CORS allow-list."""
    resp = await client.options(
        "/transcribe",
        headers={
            "Origin": "http://localhost:8501",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert resp.headers.get("access-control-allow-origin") == "http://localhost:8501"


async def test_cors_rejects_unknown_origin(client):
    """Origins not in the allow-list receive no CORS header."""
    resp = await client.options(
        "/transcribe",
        headers={
            "Origin": "http://evil.example.com",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert "access-control-allow-origin" not in resp.headers


# ---------------------------------------------------------------------------
# Upload validation
# ---------------------------------------------------------------------------


class TestUploadValidation:
    """Requests the gateway rejects before calling the provider."""

    async def test_no_file_returns_400(self, client, mock_stt):
        resp = await client.post("/transcribe")
        assert resp.status_code == 400
        body = resp.json()
        assert body["error"] == "No audio file uploaded"
        assert body["code"] == "NO_AUDIO_FILE"
        mock_stt.transcribe.assert_not_called()

    async def test_text_field_instead_of_file_returns_400(self, client, mock_stt):
        resp = await client.post("/transcribe", data={"audio": "not-a-file"})
        assert resp.status_code == 400
        assert resp.json()["error"] == "No audio file uploaded"
        mock_stt.transcribe.assert_not_called()

    async def test_file_under_other_field_returns_400(self, client, mock_stt, sample_wav_bytes):
        """Only the ``audio`` field is read."""
        resp = await client.post("/transcribe", files={"file": ("a.wav", sample_wav_bytes, "audio/wav")})
        assert resp.status_code == 400
        assert "error" in resp.json()
        mock_stt.transcribe.assert_not_called()

    async def test_non_audio_returns_400(self, client, mock_stt):
        resp = await client.post("/transcribe", files=_upload(b"hello", "text/plain", "notes.txt"))
        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid file type. Only audio files are allowed."
        mock_stt.transcribe.assert_not_called()

    async def test_empty_file_returns_400(self, client, mock_stt):
        resp = await client.post("/transcribe", files=_upload(b""))
        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid audio file"
        mock_stt.transcribe.assert_not_called()

    async def test_oversize_file_returns_413(self, client, mock_stt):
        settings = SimpleNamespace(max_upload_mb=1)
        with patch("transcriber.api.routes.transcription.get_settings", return_value=settings):
            resp = await client.post(
                "/transcribe", files=_upload(b"\x00" * (1024 * 1024 + 1))
            )
        assert resp.status_code == 413
        assert resp.json()["code"] == "AUDIO_TOO_LARGE"
        mock_stt.transcribe.assert_not_called()


# ---------------------------------------------------------------------------
# Provider outcomes
# ---------------------------------------------------------------------------


class TestTranscribe:
    """Provider success and failure handling."""

    async def test_success_returns_transcript(self, client, mock_stt, sample_wav_bytes):
        resp = await client.post("/transcribe", files=_upload(sample_wav_bytes))
        assert resp.status_code == 200
        assert resp.json() == {"transcript": "hello world"}

    async def test_forwards_bytes_and_mimetype(self, client, mock_stt, sample_wav_bytes):
        await client.post("/transcribe", files=_upload(sample_wav_bytes, "audio/webm", "r.webm"))
        mock_stt.transcribe.assert_awaited_once_with(sample_wav_bytes, "audio/webm")

    async def test_empty_transcript_is_returned(self, client, mock_stt, sample_wav_bytes):
        mock_stt.transcribe.return_value = {
            "results": {"channels": [{"alternatives": [{"transcript": ""}]}]}
        }
        resp = await client.post("/transcribe", files=_upload(sample_wav_bytes))
        assert resp.status_code == 200
        assert resp.json() == {"transcript": ""}

    async def test_provider_error_returns_500(self, client, mock_stt, sample_wav_bytes):
        mock_stt.transcribe.side_effect = TranscriptionError("Deepgram returned 401: bad key")
        resp = await client.post("/transcribe", files=_upload(sample_wav_bytes))
        assert resp.status_code == 500
        body = resp.json()
        assert body["error"] == "Transcription failed"
        assert "401" in body["details"]

    async def test_unexpected_provider_exception_returns_500(
        self, client, mock_stt, sample_wav_bytes
    ):
        mock_stt.transcribe.side_effect = RuntimeError("socket closed")
        resp = await client.post("/transcribe", files=_upload(sample_wav_bytes))
        assert resp.status_code == 500
        body = resp.json()
        assert body["error"] == "Transcription failed"
        assert body["details"] == "socket closed"

    async def test_malformed_result_returns_500(self, client, mock_stt, sample_wav_bytes):
        mock_stt.transcribe.return_value = {"results": {"channels": []}}
        resp = await client.post("/transcribe", files=_upload(sample_wav_bytes))
        assert resp.status_code == 500
        assert resp.json()["error"] == "Transcription failed"

    async def test_missing_results_returns_500(self, client, mock_stt, sample_wav_bytes):
        mock_stt.transcribe.return_value = {}
        resp = await client.post("/transcribe", files=_upload(sample_wav_bytes))
        assert resp.status_code == 500
        assert "details" in resp.json()

    async def test_non_dict_result_returns_500(self, client, mock_stt, sample_wav_bytes):
        mock_stt.transcribe.return_value = ["unexpected"]
        resp = await client.post("/transcribe", files=_upload(sample_wav_bytes))
        assert resp.status_code == 500
        body = resp.json()
        assert body["error"] == "Transcription failed"
        assert "no results" in body["details"]
