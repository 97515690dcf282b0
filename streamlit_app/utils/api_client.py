"""
Backend API Client Module.

This module is the single source of truth for all backend API communication
from the Streamlit app. All HTTP calls to the FastAPI backend go through it.

Key principles:
- Centralized error handling for network issues
- Consistent timeouts
- Receipt lookups are exposed as a BaseReceiptBackend, so the page's
  controller does not know whether it talks to this API or to a database
"""

import os
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests
import streamlit as st

from catalog.backends.base import BaseReceiptBackend
from catalog.errors import LOOKUP_FAILED_PREFIX, NOT_FOUND_MESSAGE, ReceiptLookupError
from catalog.models import Receipt

RECEIPT_TIMEOUT_SECONDS = 15


def get_backend_url() -> str:
    """
    Get the backend API base URL from environment variable or use default.

    Returns:
        Backend URL string with trailing slash removed. Defaults to
        http://localhost:8000 for local development.
    """
    url = os.getenv("BACKEND_URL", "http://localhost:8000")
    return url.rstrip("/")


@st.cache_data(ttl=60)  # Cache for 60 seconds to avoid hitting backend too frequently
def get_health_status() -> Optional[Dict[str, Any]]:
    """
    Check backend health status by calling /health endpoint.

    Returns:
        The /health payload if the backend reports status "ok", None if it is
        unreachable or unhealthy.
    """
    try:
        response = requests.get(f"{get_backend_url()}/health", timeout=5)
        response.raise_for_status()
        data = response.json()
    except (requests.exceptions.RequestException, ValueError):
        return None
    return data if data.get("status") == "ok" else None


def _error_detail(response: Optional[requests.Response]) -> str:
    if response is None:
        return "Backend returned an error"
    try:
        detail = response.json().get("detail")
    except (ValueError, AttributeError):
        detail = None
    if not detail:
        return f"Backend returned an error: {response.status_code} - {response.text}"
    # the controller adds the prefix again
    if detail.startswith(LOOKUP_FAILED_PREFIX):
        detail = detail[len(LOOKUP_FAILED_PREFIX):]
    return detail


class ApiReceiptBackend(BaseReceiptBackend):
    """Receipt backend that calls GET /receipts/{slug} on the FastAPI backend."""
    name = "api"

    def __init__(self, base_url: Optional[str] = None, timeout: float = RECEIPT_TIMEOUT_SECONDS) -> None:
        self.base_url = (base_url or get_backend_url()).rstrip("/")
        self.timeout = timeout

    def fetch_receipt(self, slug: str, language: str) -> Optional[Receipt]:
        """
        Fetch one receipt from the backend.

        Returns:
            Receipt, or None when the backend reports the receipt as not found.
            A 404 with any other detail (e.g. a wrong BACKEND_URL) is a lookup error.

        Raises:
            ReceiptLookupError: On timeouts, connection errors and other non-2xx answers.
        """
        url = f"{self.base_url}/receipts/{quote(slug, safe='')}"
        try:
            response = requests.get(url, params={"language": language}, timeout=self.timeout)
            if response.status_code == 404:
                detail = _error_detail(response)
                if detail == NOT_FOUND_MESSAGE:
                    return None
                raise ReceiptLookupError(f"Receipt endpoint not found at {self.base_url} (check BACKEND_URL): {detail}")
            response.raise_for_status()
            return Receipt.from_row(response.json())
        except requests.exceptions.Timeout as e:
            raise ReceiptLookupError("Request timed out. The backend may be slow or unreachable.") from e
        except requests.exceptions.ConnectionError as e:
            raise ReceiptLookupError(
                "Could not connect to backend. Please check your connection and that the backend is running."
            ) from e
        except requests.exceptions.HTTPError as e:
            raise ReceiptLookupError(_error_detail(e.response)) from e
        except requests.exceptions.RequestException as e:
            raise ReceiptLookupError(str(e)) from e
        except ValueError as e:
            raise ReceiptLookupError(f"Invalid receipt payload from backend: {e}") from e
