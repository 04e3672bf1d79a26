"""
Audio Transcriber Streamlit UI — main entry point.

Run with: ``streamlit run transcriber/ui/app.py``
"""

# ---------------------------------------------------------------------------
# Ensure project root is on sys.path so ``from transcriber.xxx`` imports work.
# Streamlit replaces sys.path[0] with the script directory (transcriber/ui/).
# ---------------------------------------------------------------------------
import sys  # noqa: E402
from pathlib import Path  # noqa: E402

_project_root = str(Path(__file__).resolve().parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import asyncio  # noqa: E402
import logging  # noqa: E402

import streamlit as st  # noqa: E402

from transcriber.core.config import get_settings  # noqa: E402
from transcriber.services.storage import SQLTranscriptStore, configure_engine, init_db  # noqa: E402
from transcriber.ui.components.history_list import render_history  # noqa: E402
from transcriber.ui.components.recorder import render_recorder  # noqa: E402
from transcriber.ui.gateway_client import GatewayClient  # noqa: E402
from transcriber.ui.history import TranscriptHistory  # noqa: E402
from transcriber.ui.workflow import TranscriptionWorkflow  # noqa: E402

# ---------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="Audio Transcriber",
    page_icon="\U0001f399️",
    layout="wide",
)

_settings = get_settings()


@st.cache_resource
def _init_storage() -> None:
    """Configure logging and create the transcript table once per server process."""
    logging.basicConfig(level=_settings.log_level.upper())
    if _settings.database_url.startswith("sqlite") and ":///" in _settings.database_url:
        db_path = _settings.database_url.split(":///", 1)[1]
        if db_path and db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    # Every action runs in its own asyncio.run loop, so no pooled connections
    configure_engine(pooled=False)
    asyncio.run(init_db())


def _queue_alert(message: str) -> None:
    st.session_state.alerts.append(message)


@st.dialog("Notice")
def _show_alert(message: str) -> None:
    st.write(message)
    if st.button("OK", type="primary"):
        st.session_state.alerts.pop(0)
        st.rerun()


# ---------------------------------------------------------------------------
# Session state defaults
# ---------------------------------------------------------------------------
_init_storage()

_DEFAULTS = {
    "gateway_url": _settings.gateway_url,
    "last_upload_id": None,
    "last_clip_id": None,
    "alerts": [],
}

for key, value in _DEFAULTS.items():
    if key not in st.session_state:
        st.session_state[key] = value

if "history" not in st.session_state:
    st.session_state.history = TranscriptHistory(SQLTranscriptStore(), notify=_queue_alert)
    asyncio.run(st.session_state.history.refresh())

# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------
with st.sidebar:
    st.title("\U0001f399️ Audio Transcriber")
    st.session_state.gateway_url = st.text_input(
        "Transcription server URL",
        value=st.session_state.gateway_url,
        help="URL of the transcription gateway (default: http://localhost:3030)",
    )

_gateway = GatewayClient(st.session_state.gateway_url, timeout=_settings.request_timeout)

with st.sidebar:
    _conn_ok, _conn_msg = asyncio.run(_gateway.check_connection())
    if _conn_ok:
        st.success(f"Server: {_conn_msg}")
    else:
        st.error(f"Server: {_conn_msg}")

if "workflow" not in st.session_state:
    st.session_state.workflow = TranscriptionWorkflow(
        _gateway,
        st.session_state.history,
        max_upload_mb=_settings.client_max_upload_mb,
    )
else:
    st.session_state.workflow.gateway = _gateway

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
left, right = st.columns(2)
with left:
    render_recorder()
with right:
    render_history()

if st.session_state.alerts:
    _show_alert(st.session_state.alerts[0])
