"""Catalog service - admission, lending and removal of catalog items.

Persistence always happens before notification: a subscriber failure can
never undo a stored change.

Loan and return are load-modify-save sequences. They are protected by the
store's optimistic versioning: when two callers loan the same item
concurrently, the second save raises ConcurrentModification. The item
and its loan record are written in one transaction. Removal only deletes
the row at the version that was checked, so a loan landing in between
makes removal fail instead of deleting a loaned item.
"""

import logging
from datetime import datetime
from typing import Any, List, Optional

from domain.catalog.exceptions import DuplicateItem, InvalidOperation, ItemNotFound, ValidationFailure
from domain.catalog.lifecycle import ItemLifecycle
from domain.catalog.models import Availability, Item, LoanRecord, utcnow
from domain.catalog.ports import RecordStorePort
from domain.notifications.hub import NotificationHub
from domain.validation.engine import ValidationPipeline
from domain.validation.models import ValidationResult
from observability.correlation import with_correlation_id

from .schemas import CatalogStatistics
from .search import SearchStrategy


logger = logging.getLogger(__name__)


class CatalogService:
    """Service for catalog operations.

    The record store is injected and owned by the service from
    construction until close(); the service can be used as a context
    manager to guarantee the store is closed.
    """

    def __init__(
        self,
        store: RecordStorePort,
        pipeline: Optional[ValidationPipeline] = None,
        lifecycle: Optional[ItemLifecycle] = None,
        hub: Optional[NotificationHub] = None
    ):
        self.store = store
        self.pipeline = pipeline or ValidationPipeline()
        self.lifecycle = lifecycle or ItemLifecycle()
        self.hub = hub or NotificationHub()

    def __enter__(self) -> "CatalogService":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self.store.close()

    # Subscribers

    def subscribe(self, subscriber: Any) -> None:
        self.hub.subscribe(subscriber)

    def unsubscribe(self, subscriber: Any) -> bool:
        return self.hub.unsubscribe(subscriber)

    # Admission

    def validate(self, item: Item) -> ValidationResult:
        return self.pipeline.run(item)

    @with_correlation_id
    def admit(self, item: Item) -> Item:
        """Validate, de-duplicate, persist and announce a new item.

        Args:
            item: Candidate item (id must be None)

        Returns:
            The persisted item with its assigned id

        Raises:
            InvalidOperation: If the item already has an id
            ValidationFailure: If any validator reports an error
            DuplicateItem: If an item with the same title and author exists
        """
        if item.id is not None:
            raise InvalidOperation(f"Item {item.id} is already in the catalog")

        result = self.pipeline.run(item)
        if not result.is_valid:
            logger.info(f"Admission rejected for '{item.title}': {len(result.errors)} errors")
            raise ValidationFailure(result)

        item.title = item.title.strip()
        item.author = item.author.strip()
        # New items always enter the catalog available
        item.availability = Availability.AVAILABLE

        if self.store.exists_by_title_and_author(item.title, item.author):
            raise DuplicateItem(item.title, item.author)

        stored = self.store.save(item)

        if result.has_warnings:
            logger.warning(
                f"Item {stored.id} admitted with warnings: {'; '.join(result.warnings)}",
                extra={"item_id": stored.id}
            )
        else:
            logger.info(f"Item {stored.id} admitted", extra={"item_id": stored.id})

        self.hub.publish_admitted(stored)
        return stored

    @with_correlation_id
    def update_item(self, item_id: int, **changes: Any) -> Item:
        """Change descriptive fields of an item and re-validate it.

        Raises:
            ItemNotFound: If the item does not exist
            ValueError: If a field is not editable
            ValidationFailure: If the changed item no longer validates
            DuplicateItem: If the new title/author pair already exists
        """
        item = self.get_item(item_id)
        old_key = (item.title, item.author)
        item.update(**changes)

        result = self.pipeline.run(item)
        if not result.is_valid:
            raise ValidationFailure(result)

        item.title = item.title.strip()
        item.author = item.author.strip()
        if (item.title, item.author) != old_key and self.store.exists_by_title_and_author(item.title, item.author):
            raise DuplicateItem(item.title, item.author)

        stored = self.store.save(item)
        logger.info(f"Item {stored.id} updated: {sorted(changes)}", extra={"item_id": stored.id})
        return stored

    # Lending

    @with_correlation_id
    def loan(self, item_id: int, borrower: Optional[str] = None, loan_days: Optional[int] = None) -> Item:
        """Lend an available item.

        Raises:
            ItemNotFound: If the item does not exist
            InvalidOperation: If the item is already on loan or changed concurrently
        """
        item = self.get_item(item_id)
        change = self.lifecycle.loan(item, borrower=borrower, loan_days=loan_days)

        stored = self.store.save_with_loan(item, change.loan)

        logger.info(f"Item {stored.id} loaned", extra={"item_id": stored.id})
        self.hub.publish_state_changed(stored, change.old_state, change.new_state)
        return stored

    @with_correlation_id
    def return_item(self, item_id: int) -> Item:
        """Take back a loaned item.

        Raises:
            ItemNotFound: If the item does not exist
            InvalidOperation: If the item is not on loan or changed concurrently
        """
        item = self.get_item(item_id)
        active_loan = self.store.find_active_loan(item_id)
        change = self.lifecycle.return_item(item, loan=active_loan)

        stored = self.store.save_with_loan(item, change.loan)

        logger.info(f"Item {stored.id} returned", extra={"item_id": stored.id})
        self.hub.publish_state_changed(stored, change.old_state, change.new_state)
        return stored

    @with_correlation_id
    def remove(self, item_id: int) -> None:
        """Delete an item that is not on loan.

        Raises:
            ItemNotFound: If the item does not exist
            InvalidOperation: If the item is on loan or changed concurrently
        """
        item = self.get_item(item_id)
        self.lifecycle.ensure_removable(item)
        self.store.delete(item)
        logger.info(f"Item {item_id} removed", extra={"item_id": item_id})

    def overdue_loans(self, as_of: Optional[datetime] = None) -> List[LoanRecord]:
        return self.store.find_overdue_loans(as_of or utcnow())

    # Queries

    def get_item(self, item_id: int) -> Item:
        item = self.store.find_by_id(item_id)
        if item is None:
            raise ItemNotFound(item_id)
        return item

    def list_items(self) -> List[Item]:
        return self.store.find_all()

    def list_available(self) -> List[Item]:
        return self.store.find_by_state(Availability.AVAILABLE)

    def list_loaned(self) -> List[Item]:
        return self.store.find_by_state(Availability.LOANED)

    def search(self, strategy: SearchStrategy, criterion: Optional[str]) -> List[Item]:
        return strategy.search(self.store.find_all(), criterion)

    def statistics(self) -> CatalogStatistics:
        return CatalogStatistics(
            total_items=self.store.count(),
            available_items=self.store.count_by_state(Availability.AVAILABLE),
            loaned_items=self.store.count_by_state(Availability.LOANED)
        )
