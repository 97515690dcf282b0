"""
In-memory receipt backend.

Holds receipts in a dictionary keyed by (slug, language). Used for local
demos (RECEIPTS_BACKEND=memory) and as a deterministic backend in tests.
"""

import logging
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from catalog.models import Receipt
from .base import BaseReceiptBackend

logger = logging.getLogger(__name__)


class InMemoryReceiptBackend(BaseReceiptBackend):
    """Receipt backend backed by a plain dictionary."""
    name = "memory"

    def __init__(self, receipts: Optional[Iterable[Union[Receipt, Dict[str, Any]]]] = None) -> None:
        """
        Args:
            receipts: Receipts or raw rows to load. Defaults to the bundled
                      sample receipts.
        """
        if receipts is None:
            from catalog.sample_data import SAMPLE_RECEIPTS
            receipts = SAMPLE_RECEIPTS

        self._receipts: Dict[Tuple[str, str], Receipt] = {}
        for item in receipts:
            receipt = item if isinstance(item, Receipt) else Receipt.from_row(item)
            key = (receipt.slug, receipt.language)
            if key in self._receipts:
                logger.warning("Duplicate receipt for slug=%s language=%s, keeping the last one", *key)
            self._receipts[key] = receipt

    def __len__(self) -> int:
        return len(self._receipts)

    def fetch_receipt(self, slug: str, language: str) -> Optional[Receipt]:
        return self._receipts.get((slug, language))
