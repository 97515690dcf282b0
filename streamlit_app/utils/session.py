"""
Session management utilities for Streamlit pages.

The active language and the receipt page controller live in
st.session_state so they persist across reruns and page navigation within
one browser session.
"""

from typing import Callable

import streamlit as st

from catalog.backends.base import BaseReceiptBackend
from catalog.controller import ReceiptDetailController
from catalog.i18n import DEFAULT_LANGUAGE, normalize_language

LANGUAGE_KEY = "language"
CONTROLLER_KEY = "receipt_controller"


def get_language() -> str:
    """
    Get the active language code, initializing it to the default.

    Returns:
        Supported language code
    """
    if LANGUAGE_KEY not in st.session_state:
        st.session_state[LANGUAGE_KEY] = DEFAULT_LANGUAGE
    return normalize_language(st.session_state[LANGUAGE_KEY])


def set_language(language: str) -> None:
    st.session_state[LANGUAGE_KEY] = normalize_language(language)


def get_or_create_controller(backend_factory: Callable[[], BaseReceiptBackend]) -> ReceiptDetailController:
    """
    Get the receipt page controller for this session, creating it on first use.

    Args:
        backend_factory: Called once to build the backend for a new controller

    Returns:
        ReceiptDetailController stored in session state
    """
    if CONTROLLER_KEY not in st.session_state:
        st.session_state[CONTROLLER_KEY] = ReceiptDetailController(backend_factory(), language=get_language())
    return st.session_state[CONTROLLER_KEY]
