"""
Supabase (PostgREST) receipt backend.

Queries the hosted `receipts` table over the PostgREST HTTP API, embedding
the related `nutritional_info` row in the same request:

    GET {SUPABASE_URL}/rest/v1/receipts
        ?select=*,nutritional_info(*)
        &slug=eq.<slug>&language=eq.<language>&limit=1

Requires SUPABASE_URL and SUPABASE_ANON_KEY (in the environment or the .env
file at the project root). SUPABASE_TIMEOUT (seconds, default 10) bounds each
request.
"""

import logging
import os
from typing import Any, Dict, List, Optional

import requests
from dotenv import load_dotenv
from pydantic import ValidationError

from catalog.errors import ReceiptLookupError
from catalog.models import Receipt
from .base import BaseReceiptBackend

logger = logging.getLogger(__name__)

RECEIPTS_TABLE = "receipts"
SELECT_WITH_NUTRITION = "*,nutritional_info(*)"
DEFAULT_TIMEOUT_SECONDS = 10.0


class SupabaseReceiptBackend(BaseReceiptBackend):
    """
    Receipt backend for a hosted Supabase project.

    Uses requests with a shared Session so the connection is reused across
    page views.
    """
    name = "supabase"

    def __init__(
        self,
        url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Initialize the backend.

        Args:
            url: Project URL (optional, reads SUPABASE_URL if not provided)
            api_key: Anonymous API key (optional, reads SUPABASE_ANON_KEY if not provided)
            timeout: Request timeout in seconds (optional, reads SUPABASE_TIMEOUT, default 10)
            session: requests.Session to use (optional, mainly for tests)

        Raises:
            RuntimeError: If the URL or API key is not configured.
        """
        load_dotenv()

        base_url = url or os.getenv("SUPABASE_URL")
        key = api_key or os.getenv("SUPABASE_ANON_KEY")
        if not base_url or not key:
            raise RuntimeError(
                "Supabase is not configured. Please add SUPABASE_URL and SUPABASE_ANON_KEY "
                "to your .env file at the project root."
            )

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else _timeout_from_env()
        self.session = session or requests.Session()
        self.session.headers.update({
            "apikey": key,
            "Authorization": f"Bearer {key}",
            "Accept": "application/json",
        })

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/rest/v1/{RECEIPTS_TABLE}"

    def fetch_receipt(self, slug: str, language: str) -> Optional[Receipt]:
        """
        Look up one receipt via PostgREST.

        Raises:
            ReceiptLookupError: On timeouts, connection errors, non-2xx
                responses or rows that do not match the record schema.
        """
        params = {
            "select": SELECT_WITH_NUTRITION,
            "slug": f"eq.{slug}",
            "language": f"eq.{language}",
            "limit": "1",
        }

        try:
            response = self.session.get(self.endpoint, params=params, timeout=self.timeout)
            response.raise_for_status()
            rows: List[Dict[str, Any]] = response.json()
        except requests.exceptions.Timeout as e:
            raise ReceiptLookupError(f"Request to receipts backend timed out after {self.timeout:g}s") from e
        except requests.exceptions.HTTPError as e:
            raise ReceiptLookupError(_describe_http_error(e.response)) from e
        except requests.exceptions.RequestException as e:
            raise ReceiptLookupError(str(e)) from e
        except ValueError as e:
            raise ReceiptLookupError(f"Invalid JSON from receipts backend: {e}") from e

        if not rows:
            return None

        try:
            return Receipt.from_row(rows[0])
        except ValidationError as e:
            raise ReceiptLookupError(f"Malformed receipt row for slug '{slug}': {e}") from e


def _timeout_from_env() -> float:
    raw = os.getenv("SUPABASE_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        return float(raw)
    except ValueError:
        logger.warning("Invalid SUPABASE_TIMEOUT %r, using %ss", raw, DEFAULT_TIMEOUT_SECONDS)
        return DEFAULT_TIMEOUT_SECONDS

def _describe_http_error(response: Optional[requests.Response]) -> str:
    """Turn a PostgREST error response into a one-line message."""
    if response is None:
        return "Receipts backend returned an error"
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get("message"):
        return f"{response.status_code} - {payload['message']}"
    return f"{response.status_code} - {response.text or response.reason}"
