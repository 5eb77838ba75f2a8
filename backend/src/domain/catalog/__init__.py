"""Catalog domain module - items, lending lifecycle, loan records

Availability flow: AVAILABLE ⇄ LOANED
"""

from .models import (
    Availability,
    Item,
    ItemCategory,
    ItemMedium,
    LoanRecord,
    StateChange,
)
from .builder import ItemBuilder
from .legacy import LegacyRecord, from_legacy
from .exceptions import (
    CatalogError,
    ConcurrentModification,
    DuplicateItem,
    InvalidOperation,
    ItemNotFound,
    StateTransitionError,
    ValidationFailure,
)
from .lifecycle import (
    ALLOWED_TRANSITIONS,
    DEFAULT_LOAN_DAYS,
    ItemLifecycle,
    can_transition,
    get_allowed_transitions,
    validate_transition,
)
from .ports import RecordStorePort

__all__ = [
    "Availability",
    "Item",
    "ItemCategory",
    "ItemMedium",
    "LoanRecord",
    "StateChange",
    "ItemBuilder",
    "LegacyRecord",
    "from_legacy",
    "CatalogError",
    "ConcurrentModification",
    "DuplicateItem",
    "InvalidOperation",
    "ItemNotFound",
    "StateTransitionError",
    "ValidationFailure",
    "ALLOWED_TRANSITIONS",
    "DEFAULT_LOAN_DAYS",
    "ItemLifecycle",
    "can_transition",
    "get_allowed_transitions",
    "validate_transition",
    "RecordStorePort",
]
