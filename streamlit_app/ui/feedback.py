"""
Loading, error and empty-state widgets for the receipt page.
"""

from contextlib import contextmanager
from typing import Optional

import streamlit as st


def show_loading(message: str) -> None:
    st.info(f"⏳ {message}")


def show_error(message: str, hint: Optional[str] = None) -> None:
    """
    Display a receipt error (missing slug, not found or failed lookup).

    Args:
        message: Error message from the controller state
        hint: Optional caption shown below the message
    """
    st.error(f"⚠️ {message}")
    if hint:
        st.caption(f"💡 {hint}")


def show_empty_state(message: str, hint: Optional[str] = None) -> None:
    st.info(f"📭 {message}")
    if hint:
        st.caption(hint)


@contextmanager
def working_spinner(label: str):
    """
    Show a spinner while a receipt lookup is in flight.

    Usage:
        with working_spinner(labels["loading"]):
            asyncio.run(controller.load(slug, language))
    """
    with st.spinner(label):
        yield
