"""SubscriberPort interface for catalog event observers"""

from abc import ABC, abstractmethod

from domain.catalog.models import Availability, Item


class SubscriberPort(ABC):
    """Observer of catalog events.

    Handlers run synchronously on the publishing thread. They should be
    quick and side-effect-only; an exception raised by a handler is logged
    by the hub and does not reach the publisher.
    """

    name: str = "subscriber"

    @abstractmethod
    def on_item_admitted(self, item: Item) -> None:
        """Called after a new item has been persisted."""
        pass

    @abstractmethod
    def on_state_changed(self, item: Item, old_state: Availability, new_state: Availability) -> None:
        """Called after an availability change has been persisted."""
        pass
