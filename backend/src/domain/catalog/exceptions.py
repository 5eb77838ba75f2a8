"""Catalog error taxonomy.

All errors surface to the caller unchanged; an outer layer (e.g. HTTP)
maps them to transport-specific responses:

- ValidationFailure: admission rejected by the validation pipeline
- ItemNotFound: unknown item identifier
- InvalidOperation: illegal lifecycle transition, removal of a loaned item,
  duplicate (title, author) pair, or a stale concurrent update
"""

from typing import Any, Optional

from domain.validation.models import ValidationResult


class CatalogError(Exception):
    """Base class for catalog core errors."""
    pass


class ValidationFailure(CatalogError):
    """Raised when an item fails admission validation.

    Carries the full ValidationResult (errors and warnings) for display.
    """

    def __init__(self, result: ValidationResult, message: Optional[str] = None):
        self.result = result
        super().__init__(message or f"Item validation failed: {'; '.join(result.errors)}")

    @property
    def errors(self) -> tuple[str, ...]:
        return self.result.errors

    @property
    def warnings(self) -> tuple[str, ...]:
        return self.result.warnings


class ItemNotFound(CatalogError):
    """Raised when an operation references a non-existent item."""

    def __init__(self, item_id: Any):
        self.item_id = item_id
        super().__init__(f"Item {item_id} not found")


class InvalidOperation(CatalogError):
    """Raised when a request violates catalog rules."""
    pass


class StateTransitionError(InvalidOperation):
    """Raised when an availability transition is not allowed."""
    pass


class DuplicateItem(InvalidOperation):
    """Raised when an item with the same title and author already exists."""

    def __init__(self, title: str, author: str):
        self.title = title
        self.author = author
        super().__init__(f"An item with the same title and author already exists: {title} - {author}")


class ConcurrentModification(InvalidOperation):
    """Raised when an item changed in the store since it was loaded."""

    def __init__(self, item_id: Any, expected_version: int):
        self.item_id = item_id
        self.expected_version = expected_version
        super().__init__(
            f"Item {item_id} was modified concurrently (expected version {expected_version})"
        )
