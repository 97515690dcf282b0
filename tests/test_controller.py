"""
Tests for the receipt detail view controller.

These tests verify that:
- A missing slug never issues a lookup and sets the error synchronously
- Found / not found / failed lookups reach the right terminal state
- Loading, error and receipt are mutually exclusive
- A superseded lookup never overwrites the state of a newer request
- Changing the language re-fetches the receipt in the new language
"""

import asyncio
import threading
from unittest.mock import Mock

import pytest

from catalog.backends.base import BaseReceiptBackend
from catalog.backends.memory_backend import InMemoryReceiptBackend
from catalog.controller import DetailState, LoadStatus, ReceiptDetailController
from catalog.errors import ErrorKind, ReceiptLookupError
from catalog.models import Receipt


def make_backend(result=None, side_effect=None):
    backend = Mock(spec=BaseReceiptBackend)
    backend.fetch_receipt.return_value = result
    if side_effect is not None:
        backend.fetch_receipt.side_effect = side_effect
    return backend


def assert_exclusive(state: DetailState) -> None:
    """Exactly one of loading / error / receipt is authoritative."""
    flags = [state.loading, state.error is not None, state.receipt is not None]
    assert sum(flags) <= 1


class GatedBackend(BaseReceiptBackend):
    """Backend whose lookups block until released, to control completion order."""
    name = "gated"

    def __init__(self, receipts):
        self._backend = InMemoryReceiptBackend(receipts)
        self._gates = {}
        self.calls = []

    def _gate(self, key):
        return self._gates.setdefault(key, threading.Event())

    def release(self, slug, language):
        self._gate((slug, language)).set()

    def fetch_receipt(self, slug, language):
        self.calls.append((slug, language))
        if not self._gate((slug, language)).wait(timeout=5):
            raise ReceiptLookupError("gate never released")
        return self._backend.fetch_receipt(slug, language)


class TestControllerTransitions:
    """Test cases for the controller state machine."""

    def test_initial_state_is_idle(self):
        controller = ReceiptDetailController(make_backend(), language="en")
        assert controller.state.status is LoadStatus.IDLE
        assert controller.state.receipt is None
        assert controller.state.error is None

    def test_missing_slug_sets_error_synchronously_without_lookup(self):
        """Test that no slug means no lookup and an immediate error state."""
        backend = make_backend()
        controller = ReceiptDetailController(backend)

        token = controller.start(None, "en")

        assert token is None
        assert controller.state.status is LoadStatus.ERROR
        assert controller.state.error == "No receipt slug provided."
        assert controller.state.error_kind is ErrorKind.MISSING_INPUT
        assert not controller.state.loading
        backend.fetch_receipt.assert_not_called()

    @pytest.mark.parametrize("slug", [None, "", "   "])
    def test_load_without_slug_never_calls_backend(self, slug):
        backend = make_backend()
        controller = ReceiptDetailController(backend)

        state = asyncio.run(controller.load(slug, "en"))

        assert state.error == "No receipt slug provided."
        assert state.receipt is None
        backend.fetch_receipt.assert_not_called()

    def test_start_enters_loading_and_clears_previous_state(self, mango_receipt):
        controller = ReceiptDetailController(make_backend(mango_receipt))
        asyncio.run(controller.load("mango-smoothie", "en"))
        assert controller.state.receipt is not None

        controller.start("other", "en")

        assert controller.state.loading
        assert controller.state.receipt is None
        assert controller.state.error is None
        assert_exclusive(controller.state)

    def test_found_receipt_is_loaded(self, mango_receipt):
        """Test that a returned row becomes the loaded record, nutrition included."""
        backend = make_backend(mango_receipt)
        controller = ReceiptDetailController(backend)

        state = asyncio.run(controller.load("mango-smoothie", "en"))

        assert state.status is LoadStatus.LOADED
        assert state.receipt == mango_receipt
        assert state.receipt.nutritional_info.calories_kcal == 180
        assert state.error is None
        assert not state.loading
        backend.fetch_receipt.assert_called_once_with("mango-smoothie", "en")

    def test_no_row_is_not_found(self):
        """Test that an empty lookup reports 'Receipt not found.'."""
        controller = ReceiptDetailController(make_backend(None))

        state = asyncio.run(controller.load("unknown-slug", "en"))

        assert state.status is LoadStatus.ERROR
        assert state.error == "Receipt not found."
        assert state.error_kind is ErrorKind.NOT_FOUND
        assert state.receipt is None

    def test_lookup_failure_message_is_surfaced(self):
        """Test that a backend timeout becomes a failure message."""
        controller = ReceiptDetailController(make_backend(side_effect=TimeoutError("timed out after 10s")))

        state = asyncio.run(controller.load("mango-smoothie", "en"))

        assert state.status is LoadStatus.ERROR
        assert state.error == "Failed to load receipt: timed out after 10s"
        assert state.error_kind is ErrorKind.LOOKUP_FAILED
        assert state.receipt is None

    def test_lookup_failure_without_message_uses_unknown_error(self):
        controller = ReceiptDetailController(make_backend(side_effect=RuntimeError()))

        state = asyncio.run(controller.load("mango-smoothie", "en"))

        assert state.error == "Failed to load receipt: Unknown error"

    def test_controller_without_backend(self):
        """Test that a controller built without a backend still serves the missing-slug page."""
        controller = ReceiptDetailController(None)

        assert asyncio.run(controller.load(None, "en")).error_kind is ErrorKind.MISSING_INPUT

        state = asyncio.run(controller.load("mango-smoothie", "en"))
        assert state.error_kind is ErrorKind.LOOKUP_FAILED
        assert state.error == "Failed to load receipt: No receipts backend configured"

    def test_failure_is_terminal_no_retry(self):
        """Test that a failed lookup is attempted exactly once."""
        backend = make_backend(side_effect=ReceiptLookupError("boom"))
        controller = ReceiptDetailController(backend)

        asyncio.run(controller.load("mango-smoothie", "en"))

        assert backend.fetch_receipt.call_count == 1

    def test_repeated_load_is_idempotent(self, mango_receipt):
        """Test that the same key against an unchanged backend gives the same state."""
        controller = ReceiptDetailController(make_backend(mango_receipt))

        first = asyncio.run(controller.load("mango-smoothie", "en"))
        second = asyncio.run(controller.load("mango-smoothie", "en"))

        assert first.status is second.status is LoadStatus.LOADED
        assert first.receipt == second.receipt
        assert second.generation == first.generation + 1


class TestStaleResponses:
    """Test cases for last-input-wins ordering."""

    def test_stale_resolve_is_ignored(self, mango_receipt):
        controller = ReceiptDetailController(make_backend())

        old_token = controller.start("mango-smoothie", "en")
        new_token = controller.start("lentil-soup", "en")

        assert controller.resolve(old_token, mango_receipt) is False
        assert controller.state.loading
        assert controller.state.slug == "lentil-soup"

        assert controller.resolve(new_token, None) is True
        assert controller.state.error == "Receipt not found."

    def test_stale_failure_is_ignored(self, mango_receipt):
        controller = ReceiptDetailController(make_backend())

        old_token = controller.start("mango-smoothie", "en")
        new_token = controller.start("mango-smoothie", "es")
        controller.resolve(new_token, mango_receipt)

        assert controller.fail(old_token, TimeoutError("late")) is False
        assert controller.state.status is LoadStatus.LOADED
        assert controller.state.error is None

    def test_missing_slug_supersedes_in_flight_lookup(self, mango_receipt):
        controller = ReceiptDetailController(make_backend())

        token = controller.start("mango-smoothie", "en")
        controller.start(None, "en")

        assert controller.resolve(token, mango_receipt) is False
        assert controller.state.error == "No receipt slug provided."

    def test_slow_first_lookup_does_not_overwrite_newer_language(self, mango_row):
        """Test that an 'en' lookup finishing after the 'es' one is discarded."""
        es_row = dict(mango_row, id="es-id", language="es", title="Batido de mango")
        backend = GatedBackend([mango_row, es_row])
        controller = ReceiptDetailController(backend)

        async def scenario():
            first = asyncio.create_task(controller.load("mango-smoothie", "en"))
            await asyncio.sleep(0)
            second = asyncio.create_task(controller.load("mango-smoothie", "es"))
            await asyncio.sleep(0)
            backend.release("mango-smoothie", "es")
            await second
            backend.release("mango-smoothie", "en")
            await first
            return controller.state

        state = asyncio.run(scenario())

        assert state.status is LoadStatus.LOADED
        assert state.language == "es"
        assert state.receipt.title == "Batido de mango"
        assert sorted(backend.calls) == [("mango-smoothie", "en"), ("mango-smoothie", "es")]


class TestInputChanges:
    """Test cases for sync(), set_language() and set_slug()."""

    def test_sync_loads_on_first_evaluation_only(self, mango_receipt):
        backend = make_backend(mango_receipt)
        controller = ReceiptDetailController(backend)

        asyncio.run(controller.sync("mango-smoothie", "en"))
        asyncio.run(controller.sync("mango-smoothie", "en"))

        assert backend.fetch_receipt.call_count == 1

    def test_language_change_refetches_and_replaces_record(self, memory_backend):
        """Test that switching en -> es shows the Spanish record."""
        controller = ReceiptDetailController(memory_backend, language="en")

        english = asyncio.run(controller.sync("mango-smoothie", "en"))
        spanish = asyncio.run(controller.set_language("es"))

        assert english.receipt.title == "Mango Smoothie"
        assert spanish.status is LoadStatus.LOADED
        assert spanish.language == "es"
        assert spanish.receipt.title == "Batido de mango"
        assert controller.state.receipt.language == "es"

    def test_slug_change_refetches(self, memory_backend):
        controller = ReceiptDetailController(memory_backend)

        asyncio.run(controller.sync("mango-smoothie", "en"))
        state = asyncio.run(controller.set_slug("lentil-soup"))

        assert state.receipt.slug == "lentil-soup"

    def test_needs_load(self, mango_receipt):
        controller = ReceiptDetailController(make_backend(mango_receipt))
        assert controller.needs_load("mango-smoothie", "en") is True

        asyncio.run(controller.load("mango-smoothie", "en"))

        assert controller.needs_load("mango-smoothie", "en") is False
        assert controller.needs_load(" mango-smoothie ", "en") is False
        assert controller.needs_load("mango-smoothie", "es") is True
        assert controller.needs_load(None, "en") is True


def test_receipt_model_is_shared_not_copied(mango_receipt):
    """Test that the controller stores the backend's snapshot as-is."""
    controller = ReceiptDetailController(make_backend(mango_receipt))
    state = asyncio.run(controller.load("mango-smoothie", "en"))
    assert isinstance(state.receipt, Receipt)
    assert state.receipt is mango_receipt
