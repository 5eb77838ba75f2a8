"""NotificationHub - synchronous fan-out of catalog events

The registry is a tuple replaced on every subscribe/unsubscribe under a
lock (copy-on-write). Publishing reads the current tuple once, so a
delivery round always sees one consistent snapshot even when other
threads change the registry meanwhile.
"""

import logging
import threading
from typing import Any, Callable, Tuple

from domain.catalog.models import Availability, Item


logger = logging.getLogger(__name__)


class NotificationHub:
    """Registry of subscribers with best-effort, in-order delivery.

    Subscribers need on_item_admitted(item) and
    on_state_changed(item, old_state, new_state) methods (see SubscriberPort).
    The same subscriber may be registered more than once and then receives
    each event once per registration.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._subscribers: Tuple[Any, ...] = ()

    def subscribe(self, subscriber: Any) -> None:
        with self._lock:
            self._subscribers = self._subscribers + (subscriber,)
        logger.debug(f"Subscribed {_name_of(subscriber)} ({len(self._subscribers)} registered)")

    def unsubscribe(self, subscriber: Any) -> bool:
        """Remove the first registration of this exact object.

        Returns:
            True if a registration was removed, False if none matched
        """
        with self._lock:
            for index, registered in enumerate(self._subscribers):
                if registered is subscriber:
                    self._subscribers = self._subscribers[:index] + self._subscribers[index + 1:]
                    break
            else:
                return False
        logger.debug(f"Unsubscribed {_name_of(subscriber)}")
        return True

    @property
    def subscribers(self) -> Tuple[Any, ...]:
        return self._subscribers

    def __len__(self) -> int:
        return len(self._subscribers)

    def publish_admitted(self, item: Item) -> int:
        """Deliver an "item admitted" event.

        Returns:
            Number of handlers that completed without raising
        """
        return self._deliver(
            "item_admitted",
            lambda subscriber: subscriber.on_item_admitted(item)
        )

    def publish_state_changed(self, item: Item, old_state: Availability, new_state: Availability) -> int:
        """Deliver a "state changed" event.

        Returns:
            Number of handlers that completed without raising
        """
        return self._deliver(
            "state_changed",
            lambda subscriber: subscriber.on_state_changed(item, old_state, new_state)
        )

    def _deliver(self, event: str, handler: Callable[[Any], None]) -> int:
        snapshot = self._subscribers
        delivered = 0

        for subscriber in snapshot:
            try:
                handler(subscriber)
                delivered += 1
            except Exception as e:
                logger.error(
                    f"Subscriber {_name_of(subscriber)} failed handling '{event}': {e}",
                    exc_info=True
                )

        logger.debug(f"Delivered '{event}' to {delivered}/{len(snapshot)} subscribers")
        return delivered


def _name_of(subscriber: Any) -> str:
    return getattr(subscriber, "name", None) or type(subscriber).__name__
