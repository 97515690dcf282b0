"""
Detail view controller for the receipt page.

The controller resolves one receipt for a (slug, language) pair and exposes a
three-way state to the render layer: loading, error or loaded. Exactly one of
them is authoritative at any instant.

State machine:
- idle -> loading: first evaluation, or the slug/language changed
- missing slug: error ("No receipt slug provided.") without any lookup,
  never entering loading
- loading -> loaded: the backend returned a receipt
- loading -> error (not_found): the backend returned no row
- loading -> error (lookup_failed): the backend raised

Every request cycle gets a generation number. A lookup that completes after a
newer cycle has started is discarded, so the last (slug, language) input
always wins. There is no retry: a failed lookup is terminal for its cycle.

Usage:
    controller = ReceiptDetailController(backend, language="en")
    state = asyncio.run(controller.load("mango-smoothie", "en"))
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from catalog.backends.base import BaseReceiptBackend
from catalog.errors import (
    MISSING_SLUG_MESSAGE,
    NOT_FOUND_MESSAGE,
    ErrorKind,
    ReceiptLookupError,
    describe_failure,
)
from catalog.i18n import DEFAULT_LANGUAGE
from catalog.models import Receipt

logger = logging.getLogger(__name__)


class LoadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


@dataclass(frozen=True)
class DetailState:
    """
    Immutable snapshot of the controller state.

    Attributes:
        status: Current LoadStatus
        slug: Slug of the current request cycle (None if not supplied)
        language: Language code of the current request cycle
        receipt: Loaded receipt (only when status is LOADED)
        error: User-visible error message (only when status is ERROR)
        error_kind: Sub-reason of the error
        generation: Request cycle number this state belongs to
    """
    status: LoadStatus = LoadStatus.IDLE
    slug: Optional[str] = None
    language: str = DEFAULT_LANGUAGE
    receipt: Optional[Receipt] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    generation: int = 0

    @property
    def loading(self) -> bool:
        return self.status is LoadStatus.LOADING

    @property
    def key(self) -> Tuple[Optional[str], str]:
        return (self.slug, self.language)


def _clean_slug(slug: Optional[str]) -> Optional[str]:
    if slug is None:
        return None
    slug = slug.strip()
    return slug or None


class ReceiptDetailController:
    """
    Drives the receipt detail view for one page instance.

    The language is passed in explicitly (constructor, load() or
    set_language()) instead of being read from a global i18n context.

    backend may be None for a page that never has a slug to look up; a
    lookup without a backend fails its cycle like any other lookup error.
    """

    def __init__(self, backend: Optional[BaseReceiptBackend], language: str = DEFAULT_LANGUAGE) -> None:
        self._backend = backend
        self._generation = 0
        self._state = DetailState(language=language)

    @property
    def state(self) -> DetailState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    def start(self, slug: Optional[str], language: str) -> Optional[int]:
        """
        Begin a new request cycle.

        Clears any previous receipt and error. A missing or blank slug sets
        the missing-input error synchronously and issues no lookup.

        Args:
            slug: Slug from the route (may be None)
            language: Active language code

        Returns:
            Generation token to pass to resolve()/fail(), or None when no
            lookup should be issued.
        """
        self._generation += 1
        slug = _clean_slug(slug)

        if slug is None:
            self._state = DetailState(
                status=LoadStatus.ERROR,
                slug=None,
                language=language,
                error=MISSING_SLUG_MESSAGE,
                error_kind=ErrorKind.MISSING_INPUT,
                generation=self._generation,
            )
            return None

        self._state = DetailState(
            status=LoadStatus.LOADING,
            slug=slug,
            language=language,
            generation=self._generation,
        )
        return self._generation

    def _is_current(self, token: int) -> bool:
        if token != self._generation:
            logger.debug(
                "Discarding stale receipt lookup (generation %s, current %s)", token, self._generation
            )
            return False
        return True

    def resolve(self, token: int, receipt: Optional[Receipt]) -> bool:
        """
        Complete a request cycle with the backend result.

        Args:
            token: Generation token returned by start()
            receipt: Receipt returned by the backend, or None when no row matched

        Returns:
            True if the state was updated, False if the cycle was superseded.
        """
        if not self._is_current(token):
            return False

        if receipt is None:
            self._state = replace(
                self._state,
                status=LoadStatus.ERROR,
                receipt=None,
                error=NOT_FOUND_MESSAGE,
                error_kind=ErrorKind.NOT_FOUND,
            )
        else:
            self._state = replace(
                self._state,
                status=LoadStatus.LOADED,
                receipt=receipt,
                error=None,
                error_kind=None,
            )
        return True

    def fail(self, token: int, exc: Optional[BaseException]) -> bool:
        """
        Complete a request cycle with a lookup failure.

        Returns:
            True if the state was updated, False if the cycle was superseded.
        """
        if not self._is_current(token):
            return False

        logger.warning(
            "Receipt lookup failed for slug=%s language=%s: %s",
            self._state.slug, self._state.language, exc,
            exc_info=exc,
        )
        self._state = replace(
            self._state,
            status=LoadStatus.ERROR,
            receipt=None,
            error=describe_failure(exc),
            error_kind=ErrorKind.LOOKUP_FAILED,
        )
        return True

    async def load(self, slug: Optional[str], language: str) -> DetailState:
        """
        Run one full request cycle: start, a single lookup, then resolve/fail.

        The blocking backend call runs in a worker thread so the event loop is
        never blocked.

        Returns:
            The controller state after this cycle (a newer cycle's state if
            this one was superseded while in flight).
        """
        token = self.start(slug, language)
        if token is None:
            return self._state

        try:
            if self._backend is None:
                raise ReceiptLookupError("No receipts backend configured")
            receipt = await asyncio.to_thread(self._backend.fetch_receipt, self._state.slug, language)
        except Exception as e:
            self.fail(token, e)
        else:
            self.resolve(token, receipt)
        return self._state

    def needs_load(self, slug: Optional[str], language: str) -> bool:
        """True on first evaluation or when the (slug, language) key changed."""
        if self._state.status is LoadStatus.IDLE:
            return True
        return self._state.key != (_clean_slug(slug), language)

    async def sync(self, slug: Optional[str], language: str) -> DetailState:
        """Load only if the inputs changed since the last cycle."""
        if self.needs_load(slug, language):
            return await self.load(slug, language)
        return self._state

    async def set_language(self, language: str) -> DetailState:
        return await self.sync(self._state.slug, language)

    async def set_slug(self, slug: Optional[str]) -> DetailState:
        return await self.sync(slug, self._state.language)
