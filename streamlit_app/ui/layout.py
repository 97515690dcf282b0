"""
Layout primitives for consistent page structure.

Provides reusable components for page headers, sections and cards.
"""

from contextlib import contextmanager
from typing import Optional

import streamlit as st


def page_header(title: str, subtitle: Optional[str] = None) -> None:
    """
    Render a consistent page header with title and optional subtitle.

    Args:
        title: Main page title
        subtitle: Optional subtitle/description text
    """
    st.markdown(f"# {title}")
    if subtitle:
        st.caption(subtitle)


def section(title: str, caption: Optional[str] = None) -> None:
    """
    Render a section header with optional caption.

    Args:
        title: Section title
        caption: Optional caption/help text below title
    """
    st.markdown(f"### {title}")
    if caption:
        st.caption(caption)


@contextmanager
def card(title: Optional[str] = None):
    """
    Context manager for a bordered card container.

    Usage:
        with card("Card Title"):
            st.write("Card content")
    """
    with st.container(border=True):
        if title:
            st.markdown(f"### {title}")
        yield


LANGUAGE_NAMES = {"en": "English", "es": "Español"}


def language_picker(key: str) -> str:
    """
    Render the language selector and store the choice in session state.

    Changing the language triggers a rerun; pages compare the new language
    with their controller state and re-fetch.

    Args:
        key: Unique widget key per page

    Returns:
        Selected language code
    """
    from catalog.i18n import SUPPORTED_LANGUAGES
    from utils.session import get_language, set_language

    current = get_language()
    options = list(SUPPORTED_LANGUAGES)
    selected = st.selectbox(
        "Language",
        options=options,
        index=options.index(current) if current in options else 0,
        format_func=lambda code: LANGUAGE_NAMES.get(code, code),
        key=key,
    )
    if selected != current:
        set_language(selected)
    return selected
