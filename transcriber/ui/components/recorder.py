"""
Recorder component — file upload, microphone capture, transcribe, reset.

Every widget event is turned into one workflow call driven by
``asyncio.run``; the workflow object itself lives in session state.
"""

import asyncio

import streamlit as st

from transcriber.ui.capture import AudioPayload, WidgetCapture
from transcriber.ui.workflow import TranscriptionWorkflow


def _handle_upload(workflow: TranscriptionWorkflow) -> None:
    uploaded = st.file_uploader("Upload an audio file", key="upload_widget")
    if uploaded is None or uploaded.file_id == st.session_state.last_upload_id:
        return
    st.session_state.last_upload_id = uploaded.file_id
    workflow.select_file(
        AudioPayload(
            name=uploaded.name,
            data=uploaded.getvalue(),
            mimetype=uploaded.type or "",
        )
    )


def _handle_recording(workflow: TranscriptionWorkflow) -> None:
    clip = st.audio_input("Record audio", key="record_widget")
    if clip is None or clip.file_id == st.session_state.last_clip_id:
        return
    st.session_state.last_clip_id = clip.file_id

    async def _capture() -> None:
        if await workflow.start_recording(WidgetCapture(clip.getvalue())):
            await workflow.stop_recording()

    asyncio.run(_capture())


def render_recorder() -> None:
    """Render the capture / transcribe panel for the session's workflow."""
    workflow: TranscriptionWorkflow = st.session_state.workflow

    st.header("Audio Transcription")

    _handle_upload(workflow)
    _handle_recording(workflow)

    if workflow.error:
        st.error(workflow.error)

    if workflow.pending_audio is not None:
        st.caption(workflow.pending_audio.name)
        st.audio(workflow.playback_url)

    col1, col2 = st.columns(2)
    with col1:
        label = "Processing..." if workflow.is_transcribing else "Transcribe Audio"
        if st.button(label, type="primary", use_container_width=True):
            with st.spinner("Transcribing..."):
                asyncio.run(workflow.transcribe())
            st.rerun()
    with col2:
        if st.button("Reset", use_container_width=True):
            workflow.reset()
            st.rerun()

    st.subheader("Transcript")
    st.write(workflow.result)
