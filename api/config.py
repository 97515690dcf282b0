"""
Configuration management for the receipt catalog.

This module centralizes environment variable loading from the .env file at the
project root. It should be imported early in both the backend (api/main.py)
and the frontend (streamlit_app/app.py) so .env is loaded before any other
code reads environment variables.

In production the .env file usually does not exist; load_dotenv() is then a
no-op and the platform environment variables are used.

Environment Variables:
- RECEIPTS_BACKEND: Optional, "supabase" (default), "sql" or "memory"
- SUPABASE_URL: Required for the supabase backend (project URL)
- SUPABASE_ANON_KEY: Required for the supabase backend (anonymous API key)
- SUPABASE_TIMEOUT: Optional, request timeout in seconds (default: 10)
- DATABASE_URL: Required for the sql backend (SQLAlchemy URL)
- DEFAULT_LANGUAGE: Optional, fallback language code (default: "en")
- LOG_LEVEL: Optional, logging level name (default: "INFO")
- BACKEND_URL: Optional, API URL used by the Streamlit page (default: http://localhost:8000)
"""

import logging
import os
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv

from catalog.i18n import DEFAULT_LANGUAGE, normalize_language


def load_env_file() -> None:
    """
    Load environment variables from .env file at project root.

    Safe to call multiple times. Existing environment variables take
    precedence over values in the file.
    """
    # api/config.py -> api/ -> project root
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env", override=False)


# Load .env file on module import
load_env_file()


class BackendConfig:
    """Configuration for the receipts data backend."""

    @staticmethod
    def get_backend_name() -> str:
        """
        Get the configured backend name.

        Returns:
            Lowercased backend name (default: "supabase")
        """
        return os.getenv("RECEIPTS_BACKEND", "supabase").strip().lower() or "supabase"

    @staticmethod
    def get_supabase_url() -> Optional[str]:
        return os.getenv("SUPABASE_URL")

    @staticmethod
    def get_supabase_key() -> Optional[str]:
        return os.getenv("SUPABASE_ANON_KEY")

    @staticmethod
    def get_database_url() -> Optional[str]:
        return os.getenv("DATABASE_URL")


class AppConfig:
    """General application settings."""

    @staticmethod
    def get_default_language() -> str:
        """
        Get the fallback language for requests that don't name one.

        Returns:
            Supported language code (default: "en")
        """
        return normalize_language(os.getenv("DEFAULT_LANGUAGE"), default=DEFAULT_LANGUAGE)

    @staticmethod
    def get_log_level() -> int:
        """
        Get the logging level.

        Returns:
            logging level constant (default: logging.INFO)
        """
        level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").upper())
        return level if isinstance(level, int) else logging.INFO


def get_required_env_vars() -> Dict[str, bool]:
    """
    Get the required environment variables for the selected backend and their status.

    Returns:
        Dictionary mapping variable name to True if set
    """
    backend = BackendConfig.get_backend_name()
    if backend == "supabase":
        return {
            "SUPABASE_URL": BackendConfig.get_supabase_url() is not None,
            "SUPABASE_ANON_KEY": BackendConfig.get_supabase_key() is not None,
        }
    if backend == "sql":
        return {"DATABASE_URL": BackendConfig.get_database_url() is not None}
    return {}


def validate_required_config() -> None:
    """
    Validate that all environment variables required by the selected backend are set.

    Raises:
        RuntimeError: If any required configuration is missing
    """
    missing = [name for name, present in get_required_env_vars().items() if not present]
    if missing:
        raise RuntimeError(
            f"Missing required environment variables for the '{BackendConfig.get_backend_name()}' backend:\n"
            + "\n".join(f"  - {var}" for var in missing)
            + "\n\nPlease create a .env file at the project root with these variables."
        )
