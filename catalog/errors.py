"""
Error kinds recognized by the receipt detail page.

Three kinds exist and all of them are recovered locally into a single
user-visible message:
- MissingSlugError: no slug was supplied, no lookup is ever attempted
- ReceiptNotFoundError: the lookup succeeded but matched no row
- ReceiptLookupError: transport or query failure in the backend
"""

from enum import Enum
from typing import Optional

UNKNOWN_ERROR_MESSAGE = "Unknown error"
MISSING_SLUG_MESSAGE = "No receipt slug provided."
NOT_FOUND_MESSAGE = "Receipt not found."
LOOKUP_FAILED_PREFIX = "Failed to load receipt: "


class ErrorKind(str, Enum):
    """Sub-reason of an error state."""
    MISSING_INPUT = "missing_input"
    NOT_FOUND = "not_found"
    LOOKUP_FAILED = "lookup_failed"


class ReceiptError(Exception):
    """Base class for receipt page errors."""
    kind: ErrorKind = ErrorKind.LOOKUP_FAILED


class MissingSlugError(ReceiptError):
    """Raised when a receipt is requested without a slug."""
    kind = ErrorKind.MISSING_INPUT

    def __init__(self) -> None:
        super().__init__(MISSING_SLUG_MESSAGE)


class ReceiptNotFoundError(ReceiptError):
    """Raised when no receipt matches the (slug, language) pair."""
    kind = ErrorKind.NOT_FOUND

    def __init__(self, slug: str, language: str) -> None:
        self.slug = slug
        self.language = language
        super().__init__(NOT_FOUND_MESSAGE)


class ReceiptLookupError(ReceiptError):
    """
    Raised by backends when the lookup itself fails (network, timeout, query).

    The message of the underlying error is kept verbatim so it can be shown
    to the user.
    """
    kind = ErrorKind.LOOKUP_FAILED


def describe_failure(exc: Optional[BaseException]) -> str:
    """
    Build the user-visible message for a failed lookup.

    Args:
        exc: The exception raised by the backend (may be None)

    Returns:
        "Failed to load receipt: <message>", with "Unknown error" when the
        exception carries no message.
    """
    message = str(exc).strip() if exc is not None else ""
    return f"{LOOKUP_FAILED_PREFIX}{message or UNKNOWN_ERROR_MESSAGE}"
