"""
UI module - client workflow, history list, and the Streamlit shell.
"""
