"""
Global styling and small HTML helpers for the receipt catalog app.
"""

import html
import re

import streamlit as st

TAG_STYLE_COLORS = {
    "default": "#eef2ff",
    "green": "#dcfce7",
    "orange": "#ffedd5",
    "red": "#fee2e2",
    "blue": "#dbeafe",
}


def inject_global_css() -> None:
    """
    Inject global CSS styles for the receipt catalog app.

    Sets typography, the receipt card, tag pills and the footer.
    """
    css = """
    <style>
        @import url('https://fonts.googleapis.com/css2?family=Nunito:wght@400;600;700&display=swap');

        html, body, [class*="css"] {
            font-family: 'Nunito', 'sans serif' !important;
        }

        h1, h2, h3, h4, h5, h6 {
            font-weight: 600 !important;
            letter-spacing: 0.02em !important;
        }

        .rc-card {
            border-radius: 20px;
            background: white;
            border: 1px solid #e5e7eb;
            padding: 1.5rem;
            margin-bottom: 1.5rem;
        }

        .rc-category {
            text-transform: uppercase;
            font-size: 0.8rem;
            color: #205D37;
            letter-spacing: 0.08em;
        }

        .pill-tag {
            display: inline-block;
            border-radius: 999px;
            padding: 2px 10px;
            margin: 0 4px 4px 0;
            font-size: 0.75rem;
            color: #1f2933;
            white-space: nowrap;
        }

        .rc-quote {
            font-style: italic;
            border-left: 4px solid #205D37;
            padding-left: 1rem;
            color: #52606d;
        }

        .rc-footer {
            margin-top: 3rem;
            padding: 1.5rem 0;
            border-top: 1px solid #e5e7eb;
            font-size: 0.85rem;
            color: #52606d;
        }
    </style>
    """
    st.markdown(css, unsafe_allow_html=True)


def pill_tag(text: str, style: str = "default") -> str:
    """
    Create HTML for a small rounded pill tag.

    Args:
        text: Text to display in the tag
        style: Style classifier; unknown styles use the default color

    Returns:
        HTML string for the pill tag
    """
    key = re.sub(r"[^a-z0-9-]+", "-", (style or "default").lower()).strip("-")
    color = TAG_STYLE_COLORS.get(key, TAG_STYLE_COLORS["default"])
    return f'<span class="pill-tag" style="background-color: {color};">{html.escape(text)}</span>'


def render_footer(text: str) -> None:
    """Render the page footer."""
    st.markdown(f'<div class="rc-footer">{html.escape(text)}</div>', unsafe_allow_html=True)
