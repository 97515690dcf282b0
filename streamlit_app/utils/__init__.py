"""
Utility modules for the Streamlit frontend.

This package contains:
- api_client: Backend API communication
- session: Session state helpers (language, page controller)
"""
