"""Catalog domain models and enums"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ItemCategory(str, Enum):
    """Catalog item category"""
    FICTION = "FICTION"
    NON_FICTION = "NON_FICTION"

    @property
    def description(self) -> str:
        return {"FICTION": "Fiction", "NON_FICTION": "Non-Fiction"}[self.value]


class ItemMedium(str, Enum):
    """Physical or digital copy"""
    PHYSICAL = "PHYSICAL"
    DIGITAL = "DIGITAL"

    @property
    def description(self) -> str:
        return self.value.capitalize()


class Availability(str, Enum):
    """Lending state of an item.

    State flow:
    AVAILABLE → LOANED (loan)
    LOANED → AVAILABLE (return)
    """
    AVAILABLE = "AVAILABLE"
    LOANED = "LOANED"

    @property
    def description(self) -> str:
        return self.value.capitalize()


# Fields callers may change through Item.update()
EDITABLE_FIELDS = frozenset({"title", "author", "category", "medium"})


@dataclass
class Item:
    """A catalog entry (domain model, not the database model).

    ``id`` is assigned by the record store on admission. Availability is
    owned by ItemLifecycle; the descriptive fields change through update().
    ``version`` is the optimistic locking counter maintained by the store.
    """
    title: Optional[str]
    author: Optional[str]
    category: Optional[ItemCategory] = None
    medium: Optional[ItemMedium] = None
    availability: Optional[Availability] = Availability.AVAILABLE
    id: Optional[int] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None
    version: int = 0

    def __post_init__(self):
        if self.category is not None:
            self.category = ItemCategory(self.category)
        if self.medium is not None:
            self.medium = ItemMedium(self.medium)
        self.availability = Availability(self.availability) if self.availability is not None else Availability.AVAILABLE

    @property
    def is_available(self) -> bool:
        return self.availability == Availability.AVAILABLE

    def update(self, **changes: Any) -> None:
        """Change descriptive fields and stamp updated_at.

        Raises:
            ValueError: If a field is not editable or an enum value is unknown
        """
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be updated directly: {sorted(unknown)}")

        if "category" in changes and changes["category"] is not None:
            changes["category"] = ItemCategory(changes["category"])
        if "medium" in changes and changes["medium"] is not None:
            changes["medium"] = ItemMedium(changes["medium"])

        for name, value in changes.items():
            setattr(self, name, value)
        self.touch()

    def touch(self, at: Optional[datetime] = None) -> None:
        self.updated_at = at or utcnow()

    def describe(self) -> str:
        category = self.category.description if self.category else "-"
        medium = self.medium.description if self.medium else "-"
        availability = self.availability.description if self.availability else "-"
        return (
            f"Item[id={self.id}, title='{self.title}', author='{self.author}', "
            f"category={category}, medium={medium}, availability={availability}]"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert item to dictionary representation"""
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "category": self.category.value if self.category else None,
            "medium": self.medium.value if self.medium else None,
            "availability": self.availability.value if self.availability else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "version": self.version
        }


@dataclass
class LoanRecord:
    """Loan metadata for one lending of an item.

    Open while returned_at is None. At most one open record exists per item.
    """
    item_id: int
    loaned_at: datetime
    due_at: datetime
    borrower: Optional[str] = None
    returned_at: Optional[datetime] = None
    id: Optional[int] = None

    @classmethod
    def open(
        cls,
        item_id: int,
        loan_days: int,
        borrower: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> "LoanRecord":
        if loan_days < 1:
            raise ValueError(f"Loan period must be at least 1 day (got {loan_days})")
        loaned_at = now or utcnow()
        return cls(
            item_id=item_id,
            borrower=borrower,
            loaned_at=loaned_at,
            due_at=loaned_at + timedelta(days=loan_days)
        )

    @property
    def is_open(self) -> bool:
        return self.returned_at is None

    def close(self, at: Optional[datetime] = None) -> None:
        self.returned_at = at or utcnow()

    def is_overdue(self, as_of: Optional[datetime] = None) -> bool:
        as_of = as_of or utcnow()
        return self.is_open and as_of > self.due_at

    def days_overdue(self, as_of: Optional[datetime] = None) -> int:
        as_of = as_of or utcnow()
        if not self.is_overdue(as_of):
            return 0
        return (as_of - self.due_at).days

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "item_id": self.item_id,
            "borrower": self.borrower,
            "loaned_at": self.loaned_at.isoformat(),
            "due_at": self.due_at.isoformat(),
            "returned_at": self.returned_at.isoformat() if self.returned_at else None
        }


@dataclass(frozen=True)
class StateChange:
    """Emitted by every successful lifecycle transition"""
    item: Item
    old_state: Availability
    new_state: Availability
    occurred_at: datetime
    loan: Optional[LoanRecord] = None
