"""
Receipt Catalog - Streamlit Frontend Main Entry Point.

Sets up the page configuration and the sidebar (language and backend
status). The receipt detail page lives in `pages/` and is picked up by
Streamlit's multi-page routing.

Run with:
    streamlit run streamlit_app/app.py
"""

import sys
from pathlib import Path

# Ensure the streamlit_app directory is in the Python path
streamlit_app_dir = Path(__file__).parent
if str(streamlit_app_dir) not in sys.path:
    sys.path.insert(0, str(streamlit_app_dir))

# Add project root to path so we can import api.config and catalog
project_root = streamlit_app_dir.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Import config early to load .env file before any other code accesses environment variables
import api.config  # noqa: F401

import streamlit as st

from catalog.i18n import get_labels
from ui.layout import language_picker, page_header
from ui.style import inject_global_css, render_footer
from utils.api_client import get_health_status

# Page configuration - must be called before any other Streamlit commands
st.set_page_config(
    page_title="Receipt Catalog",
    page_icon="🧾",
    layout="centered",
    initial_sidebar_state="expanded",
)

inject_global_css()

with st.sidebar:
    st.markdown("### 🧾 **Receipt Catalog**")
    st.divider()
    language = language_picker(key="language_picker_home")
    st.divider()
    if get_health_status():
        st.success("🟢 Backend online")
    else:
        st.error("🔴 Backend offline / unreachable")

labels = get_labels(language)

page_header(title="Receipt Catalog", subtitle=labels["footer"])
st.markdown(
    "Open a receipt from the **Receipt** page in the sidebar, or link to it directly "
    "with `?slug=<receipt-slug>`."
)
try:
    st.page_link("pages/01_🧾_Receipt.py", label="🧾 Open the receipt page")
except (AttributeError, TypeError):
    # Older Streamlit versions without page_link
    pass

render_footer(labels["footer"])
