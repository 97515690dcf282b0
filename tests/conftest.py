"""
Shared fixtures for the receipt catalog tests.
"""

import copy

import pytest

from catalog.backends.memory_backend import InMemoryReceiptBackend
from catalog.models import Receipt
from catalog.sample_data import SAMPLE_RECEIPTS


@pytest.fixture
def mango_row():
    """Raw backend row for the English mango smoothie (with nutrition)."""
    return copy.deepcopy(SAMPLE_RECEIPTS[0])


@pytest.fixture
def mango_receipt(mango_row):
    return Receipt.from_row(mango_row)


@pytest.fixture
def minimal_row():
    """A row with only the required columns."""
    return {
        "id": "11111111-2222-3333-4444-555555555555",
        "language": "en",
        "slug": "plain-toast",
        "title": "Plain Toast",
    }


@pytest.fixture
def memory_backend():
    return InMemoryReceiptBackend()
