"""Built-in catalog subscribers"""

import logging
import threading
from typing import Dict

from domain.catalog.models import Availability, Item

from .port import SubscriberPort


logger = logging.getLogger(__name__)


class LoanActivitySubscriber(SubscriberPort):
    """Log admissions, loans and returns as they happen."""

    name = "loan_activity"

    def on_item_admitted(self, item: Item) -> None:
        logger.info(
            f"New item added: '{item.title}' by {item.author} "
            f"({item.category.description} - {item.medium.description})",
            extra={"item_id": item.id, "event": "item_admitted"}
        )

    def on_state_changed(self, item: Item, old_state: Availability, new_state: Availability) -> None:
        if new_state == Availability.LOANED:
            logger.info(
                f"Item loaned: '{item.title}' by {item.author}",
                extra={"item_id": item.id, "event": "item_loaned"}
            )
        elif new_state == Availability.AVAILABLE and old_state == Availability.LOANED:
            logger.info(
                f"Item returned: '{item.title}' by {item.author} is available again",
                extra={"item_id": item.id, "event": "item_returned"}
            )


class StatisticsSubscriber(SubscriberPort):
    """Count admissions, loans and returns seen since creation."""

    name = "statistics"

    def __init__(self):
        self._lock = threading.Lock()
        self.items_admitted = 0
        self.loans = 0
        self.returns = 0

    def on_item_admitted(self, item: Item) -> None:
        with self._lock:
            self.items_admitted += 1

    def on_state_changed(self, item: Item, old_state: Availability, new_state: Availability) -> None:
        with self._lock:
            if new_state == Availability.LOANED:
                self.loans += 1
            elif new_state == Availability.AVAILABLE and old_state == Availability.LOANED:
                self.returns += 1

    @property
    def currently_loaned(self) -> int:
        return self.loans - self.returns

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            return {
                "items_admitted": self.items_admitted,
                "loans": self.loans,
                "returns": self.returns,
                "currently_loaned": self.loans - self.returns,
            }
