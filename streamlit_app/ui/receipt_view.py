"""
Streamlit rendering of receipt display blocks.

Takes the output of catalog.render.build_blocks() and draws each block with
Streamlit elements. All decisions about which blocks exist were already made
by build_blocks(); this module only maps block kinds to widgets.
"""

import html
import re
from typing import List

import streamlit as st

from catalog.render import (
    BLOCK_BENEFITS,
    BLOCK_EMPTY,
    BLOCK_ERROR,
    BLOCK_HEADER,
    BLOCK_IMAGE,
    BLOCK_INGREDIENTS,
    BLOCK_LOADING,
    BLOCK_META,
    BLOCK_NUTRITION,
    BLOCK_PREPARATION,
    BLOCK_QUOTE,
    BLOCK_TAGS,
    DisplayBlock,
)
from ui.feedback import show_empty_state, show_error, show_loading
from ui.layout import card, section
from ui.style import pill_tag

_MARKDOWN_SPECIALS = re.compile(r"([\\`*_{}\[\]()#+\-.!|<>~$])")


def escape_markdown(text: str) -> str:
    """Backslash-escape markdown syntax so record text renders literally."""
    return _MARKDOWN_SPECIALS.sub(r"\\\1", text)


def _render_list(block: DisplayBlock) -> None:
    section(block.heading or "")
    st.markdown("\n".join(f"- {escape_markdown(item.text)}" for item in block.items))


def render_block(block: DisplayBlock) -> None:
    """Draw a single display block."""
    if block.kind == BLOCK_LOADING:
        show_loading(block.text or "")
    elif block.kind == BLOCK_ERROR:
        show_error(escape_markdown(block.text or ""))
    elif block.kind == BLOCK_EMPTY:
        show_empty_state(escape_markdown(block.text or ""))
    elif block.kind == BLOCK_HEADER:
        if block.heading:
            st.markdown(f'<div class="rc-category">{html.escape(block.heading)}</div>', unsafe_allow_html=True)
        st.markdown(f"# {escape_markdown(block.text or '')}")
    elif block.kind == BLOCK_IMAGE:
        st.image(block.url, caption=block.text, use_container_width=True)
    elif block.kind == BLOCK_META:
        st.caption(" • ".join(escape_markdown(item.text) for item in block.items))
    elif block.kind in (BLOCK_INGREDIENTS, BLOCK_BENEFITS):
        _render_list(block)
    elif block.kind == BLOCK_PREPARATION:
        section(block.heading or "")
        lines = (line.strip() for line in (block.text or "").splitlines())
        st.markdown("\n\n".join(escape_markdown(line) for line in lines if line))
    elif block.kind == BLOCK_NUTRITION:
        with card(block.heading):
            cols = st.columns(2)
            for idx, item in enumerate(block.items):
                cols[idx % 2].markdown(escape_markdown(item.text))
    elif block.kind == BLOCK_QUOTE:
        st.markdown(f'<blockquote class="rc-quote">{html.escape(block.text or "")}</blockquote>', unsafe_allow_html=True)
    elif block.kind == BLOCK_TAGS:
        section(block.heading or "")
        tags_html = " ".join(pill_tag(item.text, item.style or "default") for item in block.items)
        st.markdown(tags_html, unsafe_allow_html=True)


def render_blocks(blocks: List[DisplayBlock]) -> None:
    """Draw all display blocks in order."""
    for block in blocks:
        render_block(block)
