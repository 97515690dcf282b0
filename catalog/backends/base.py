"""
Base backend abstract class for receipt lookups.

Every backend answers the same read-only point lookup:

    SELECT * FROM receipts
    LEFT JOIN nutritional_info ON nutritional_info.id = receipts.nutritional_info_id
    WHERE slug = :slug AND language = :language
    LIMIT 1

All backends must:
- Return a Receipt (with its nested NutritionalInfo, if any) for a match
- Return None when no row matches (this is not an error)
- Raise ReceiptLookupError when the lookup itself fails
"""

from abc import ABC, abstractmethod
from typing import Optional

from catalog.models import Receipt


class BaseReceiptBackend(ABC):
    """
    Abstract base class for all receipt backends.

    Attributes:
        name: Short identifier of the backend (e.g., "supabase", "sql", "memory")
    """
    name: str

    @abstractmethod
    def fetch_receipt(self, slug: str, language: str) -> Optional[Receipt]:
        """
        Look up one receipt by its (slug, language) pair.

        Args:
            slug: URL-friendly receipt key
            language: Language code discriminator (e.g., "en", "es")

        Returns:
            The matching Receipt, or None if no row matches.

        Raises:
            ReceiptLookupError: If the backend could not be queried.
        """
        pass
