"""
FastAPI application for the receipt catalog.

This module defines the HTTP surface of the receipt detail page:
- GET /receipts/{slug}: JSON lookup of one receipt (with nutrition) by slug and language
- GET /pages/receipt/{slug}: rendered HTML detail page
- GET /pages/receipt: HTML page for a request without a slug
- GET /health: Health check

The active language comes from the `language` query parameter, falling back to
the Accept-Language header and then DEFAULT_LANGUAGE.

Run the API with:
    uvicorn api.main:app --reload

Access API documentation at:
    http://localhost:8000/docs (Swagger UI)
"""

# Import config early to load .env file before any other code accesses environment variables
import api.config  # noqa: F401

import logging
import time
from typing import Optional

from fastapi import Depends, FastAPI, Header, HTTPException, Query, status
from fastapi.responses import HTMLResponse

from api.config import AppConfig, BackendConfig, get_required_env_vars, validate_required_config
from api.schemas import ErrorResponse, HealthResponse, ReceiptResponse
from catalog.backends import BaseReceiptBackend, get_backend
from catalog.controller import DetailState, LoadStatus, ReceiptDetailController
from catalog.errors import NOT_FOUND_MESSAGE, ErrorKind, ReceiptLookupError, describe_failure
from catalog.i18n import resolve_language
from catalog.render import render_page

logging.basicConfig(
    level=AppConfig.get_log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

API_NAME = "Receipt Catalog API"
API_VERSION = "1.0.0"

# Track app start time for uptime calculation
_APP_START_TIME = time.time()

app = FastAPI(
    title=API_NAME,
    description="Read-only API and detail pages for the receipt (recipe) catalog",
    version=API_VERSION,
    tags_metadata=[
        {"name": "receipts", "description": "Look up a single receipt by slug and language."},
        {"name": "pages", "description": "Rendered HTML detail pages."},
        {"name": "health", "description": "Health check and monitoring endpoints."},
    ],
)

_backend: Optional[BaseReceiptBackend] = None


def get_receipt_backend() -> BaseReceiptBackend:
    """
    Get the process-wide receipts backend, creating it on first use.

    Raises:
        HTTPException 503: If the backend is not configured
    """
    global _backend
    if _backend is None:
        try:
            validate_required_config()
            _backend = get_backend(BackendConfig.get_backend_name())
        except (RuntimeError, ValueError) as e:
            logger.error("Receipts backend unavailable: %s", e)
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail=f"Receipts backend is not configured: {e}",
            ) from e
    return _backend


def get_language(
    language: Optional[str] = Query(None, description="Language code, e.g. 'en' or 'es'"),
    accept_language: Optional[str] = Header(None, alias="Accept-Language"),
) -> str:
    """Resolve the active language for a request."""
    return resolve_language(language, accept_language, default=AppConfig.get_default_language())


_PAGE_STATUS = {
    ErrorKind.MISSING_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.LOOKUP_FAILED: status.HTTP_502_BAD_GATEWAY,
}


def _page_response(state: DetailState) -> HTMLResponse:
    status_code = status.HTTP_200_OK
    if state.status is LoadStatus.ERROR and state.error_kind is not None:
        status_code = _PAGE_STATUS[state.error_kind]
    return HTMLResponse(content=render_page(state), status_code=status_code)


@app.get(
    "/receipts/{slug}",
    response_model=ReceiptResponse,
    responses={404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    tags=["receipts"],
    summary="Get one receipt by slug and language",
)
def get_receipt(
    slug: str,
    language: str = Depends(get_language),
    backend: BaseReceiptBackend = Depends(get_receipt_backend),
) -> ReceiptResponse:
    """
    Look up one receipt, including its nested nutritional information.

    Args:
        slug: URL-friendly receipt key
        language: Resolved language code

    Returns:
        ReceiptResponse for the matching record

    Raises:
        HTTPException 404: If no receipt matches (slug, language)
        HTTPException 502: If the backend lookup failed

    Example:
        ```bash
        GET /receipts/mango-smoothie?language=es
        ```
    """
    try:
        receipt = backend.fetch_receipt(slug, language)
    except ReceiptLookupError as e:
        logger.warning("Receipt lookup failed for slug=%s language=%s: %s", slug, language, e)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=describe_failure(e),
        ) from e

    if receipt is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE)

    return ReceiptResponse.from_receipt(receipt)


@app.get("/pages/receipt", response_class=HTMLResponse, tags=["pages"])
async def receipt_page_without_slug(language: str = Depends(get_language)) -> HTMLResponse:
    """
    Render the detail page when no slug was routed (shows the missing-slug message).

    No lookup is issued, so the backend is not resolved and need not be configured.
    """
    controller = ReceiptDetailController(None, language=language)
    state = await controller.load(None, language)
    return _page_response(state)


@app.get("/pages/receipt/{slug}", response_class=HTMLResponse, tags=["pages"])
async def receipt_page(
    slug: str,
    language: str = Depends(get_language),
    backend: BaseReceiptBackend = Depends(get_receipt_backend),
) -> HTMLResponse:
    """
    Render the receipt detail page.

    The status code follows the outcome: 200 loaded, 404 not found,
    502 lookup failed.
    """
    controller = ReceiptDetailController(backend, language=language)
    state = await controller.load(slug, language)
    return _page_response(state)


@app.get("/health", response_model=HealthResponse, tags=["health"])
def health() -> HealthResponse:
    """
    Health check endpoint for monitoring and status checks.

    Always returns 200 OK if the endpoint is reachable; backend_configured
    reports whether the selected backend has its required variables.
    """
    return HealthResponse(
        status="ok",
        name=API_NAME,
        version=API_VERSION,
        backend=BackendConfig.get_backend_name(),
        backend_configured=all(get_required_env_vars().values()),
        uptime_seconds=int(time.time() - _APP_START_TIME),
    )


@app.get("/")
def root():
    """
    Root endpoint providing API information.

    Returns:
        Dictionary with API name, version and docs URL
    """
    return {
        "name": API_NAME,
        "version": API_VERSION,
        "docs": "/docs",
    }
