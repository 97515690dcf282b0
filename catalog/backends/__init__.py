"""
Receipt backends.

get_backend() picks the backend named by RECEIPTS_BACKEND:
- "supabase" (default): hosted PostgREST API (SUPABASE_URL, SUPABASE_ANON_KEY)
- "sql": SQLAlchemy database (DATABASE_URL)
- "memory": bundled sample receipts, no external service
"""

import logging
import os
from typing import Optional

from .base import BaseReceiptBackend
from .memory_backend import InMemoryReceiptBackend
from .sql_backend import SqlReceiptBackend
from .supabase_backend import SupabaseReceiptBackend

logger = logging.getLogger(__name__)

DEFAULT_BACKEND = "supabase"


def _get_backend_map():
    """Get the backend map, accessing classes dynamically for test compatibility."""
    return {
        "supabase": SupabaseReceiptBackend,
        "sql": SqlReceiptBackend,
        "memory": InMemoryReceiptBackend,
    }


def get_backend(name: Optional[str] = None) -> BaseReceiptBackend:
    """
    Instantiate the configured receipt backend.

    Args:
        name: Backend name (optional, reads RECEIPTS_BACKEND, default "supabase")

    Returns:
        A ready BaseReceiptBackend

    Raises:
        ValueError: If the backend name is unknown
        RuntimeError: If the backend is missing its configuration
    """
    backend_name = (name or os.getenv("RECEIPTS_BACKEND") or DEFAULT_BACKEND).strip().lower()
    backend_map = _get_backend_map()
    if backend_name not in backend_map:
        raise ValueError(
            f"Unknown receipts backend '{backend_name}'. Expected one of: {', '.join(sorted(backend_map))}"
        )
    logger.info("Using '%s' receipts backend", backend_name)
    return backend_map[backend_name]()


__all__ = [
    "BaseReceiptBackend",
    "InMemoryReceiptBackend",
    "SqlReceiptBackend",
    "SupabaseReceiptBackend",
    "get_backend",
]
