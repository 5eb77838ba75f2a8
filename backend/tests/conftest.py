"""Pytest fixtures for catalog core testing.

Provides reusable test fixtures for:
- Candidate items (valid and invalid)
- In-memory SQLite record store
- Catalog service wired to the in-memory store
- Recording subscriber capturing published events

Usage:
    def test_admit(catalog_service, orwell_item):
        stored = catalog_service.admit(orwell_item)
        assert stored.id is not None
"""

import sys
from pathlib import Path
from typing import Generator

import pytest

# Put backend/src on the import path so tests import modules the way the code does
backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))

from domain.catalog.models import Item, ItemCategory, ItemMedium
from domain.notifications.hub import NotificationHub
from infrastructure.repositories.catalog_repository import SqlAlchemyRecordStore
from catalog.service import CatalogService


class RecordingSubscriber:
    """Subscriber that remembers every event it receives."""

    def __init__(self, name: str = "recorder", log: list = None):
        self.name = name
        self.admitted = []
        self.state_changes = []
        # Shared log lets tests check ordering across subscribers
        self.log = log if log is not None else []

    def on_item_admitted(self, item):
        self.admitted.append(item)
        self.log.append((self.name, "admitted", item.id))

    def on_state_changed(self, item, old_state, new_state):
        self.state_changes.append((item.id, old_state, new_state))
        self.log.append((self.name, "state_changed", item.id))


class FailingSubscriber:
    """Subscriber whose handlers always raise."""

    name = "failing"

    def on_item_admitted(self, item):
        raise RuntimeError("admitted handler exploded")

    def on_state_changed(self, item, old_state, new_state):
        raise RuntimeError("state handler exploded")


@pytest.fixture
def orwell_item() -> Item:
    """A valid, not yet admitted item."""
    return Item(
        title="1984",
        author="George Orwell",
        category=ItemCategory.FICTION,
        medium=ItemMedium.PHYSICAL
    )


@pytest.fixture
def make_item():
    """Factory for items with overridable fields."""
    def _make(**overrides) -> Item:
        fields = {
            "title": "Brave New World",
            "author": "Aldous Huxley",
            "category": ItemCategory.FICTION,
            "medium": ItemMedium.PHYSICAL,
        }
        fields.update(overrides)
        return Item(**fields)
    return _make


@pytest.fixture
def record_store() -> Generator[SqlAlchemyRecordStore, None, None]:
    """Fresh in-memory SQLite store for each test."""
    store = SqlAlchemyRecordStore.from_url("sqlite://")
    try:
        yield store
    finally:
        store.close()


@pytest.fixture
def hub() -> NotificationHub:
    return NotificationHub()


@pytest.fixture
def recorder(hub: NotificationHub) -> RecordingSubscriber:
    subscriber = RecordingSubscriber()
    hub.subscribe(subscriber)
    return subscriber


@pytest.fixture
def catalog_service(record_store, hub) -> CatalogService:
    return CatalogService(store=record_store, hub=hub)


@pytest.fixture
def make_recorder():
    """Factory for recording subscribers sharing an optional event log."""
    def _make(name: str = "recorder", log: list = None) -> RecordingSubscriber:
        return RecordingSubscriber(name=name, log=log)
    return _make


@pytest.fixture
def failing_subscriber() -> FailingSubscriber:
    return FailingSubscriber()
