"""History list component — previous transcriptions with delete buttons."""

import asyncio

import streamlit as st

from transcriber.ui.history import TranscriptHistory


def render_history() -> None:
    """Render every stored transcription, most recent first."""
    history: TranscriptHistory = st.session_state.history

    st.header("Previous Transcriptions")

    if not history.records:
        st.info("No transcriptions available.")
        return

    for record in history.records:
        with st.container(border=True):
            head, action = st.columns([6, 1])
            with head:
                st.markdown(f"**{record.audio_name}**")
            with action:
                if st.button("Delete", key=f"delete-{record.id}"):
                    asyncio.run(history.delete(record.id))
                    st.rerun()
            st.write(record.transcription)
