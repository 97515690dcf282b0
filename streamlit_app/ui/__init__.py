"""
UI Styling and Components Module.

This module provides global CSS styling and reusable UI components
for the receipt catalog Streamlit app.
"""

from ui.style import inject_global_css, pill_tag, render_footer

__all__ = [
    "inject_global_css",
    "pill_tag",
    "render_footer",
]
