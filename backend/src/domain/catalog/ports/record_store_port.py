"""Record Store Port - Domain interface for catalog persistence.

The catalog core only talks to storage through this port. Adapters
implement it for a concrete backend (the SQLAlchemy adapter lives in
infrastructure.repositories).

Architecture: Hexagonal - Port interface in domain layer
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from domain.catalog.models import Availability, Item, LoanRecord


class RecordStorePort(ABC):
    """Port interface for catalog item and loan record storage.

    Key Design Principles:
    - save() assigns the identifier on first insert and returns the stored item
    - Updates are optimistic: saving an item whose version no longer matches
      the stored one raises ConcurrentModification
    - Returned items are detached copies; mutating them does not change the store
    """

    @abstractmethod
    def save(self, item: Item) -> Item:
        """Insert a new item (id is None) or update an existing one.

        Returns:
            The stored item with id and version set

        Raises:
            ConcurrentModification: If the stored version differs from item.version
        """
        pass

    @abstractmethod
    def find_by_id(self, item_id: int) -> Optional[Item]:
        pass

    @abstractmethod
    def exists_by_title_and_author(self, title: str, author: str) -> bool:
        pass

    @abstractmethod
    def find_by_state(self, state: Availability) -> List[Item]:
        pass

    @abstractmethod
    def delete(self, item: Item) -> None:
        """Delete an item at the version the caller loaded, with its loan history.

        Raises:
            ItemNotFound: If the item does not exist
            ConcurrentModification: If the item changed since it was loaded
                or is no longer AVAILABLE
        """
        pass

    @abstractmethod
    def count_by_state(self, state: Availability) -> int:
        pass

    @abstractmethod
    def find_all(self) -> List[Item]:
        pass

    @abstractmethod
    def count(self) -> int:
        pass

    @abstractmethod
    def save_loan(self, loan: LoanRecord) -> LoanRecord:
        """Insert or update a loan record and return it with id set."""
        pass

    @abstractmethod
    def save_with_loan(self, item: Item, loan: Optional[LoanRecord]) -> Item:
        """Update an existing item and insert or update its loan record atomically.

        Either both writes are stored or neither is.

        Raises:
            ConcurrentModification: If the stored version differs from item.version
        """
        pass

    @abstractmethod
    def find_active_loan(self, item_id: int) -> Optional[LoanRecord]:
        """Return the open loan record of an item, if any."""
        pass

    @abstractmethod
    def find_overdue_loans(self, as_of: datetime) -> List[LoanRecord]:
        """Return open loan records due before as_of."""
        pass

    def close(self) -> None:
        """Release resources held by the store. Default: nothing to release."""
        pass
