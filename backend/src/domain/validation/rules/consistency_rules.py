"""Cross-field consistency rules"""

from typing import Any

from domain.validation.models import ValidationResult
from domain.validation.port import ValidatorPort


class ConsistencyValidator(ValidatorPort):
    """Validate required classification fields and cross-field consistency.

    Rules implemented:
    - category, medium and availability must be set
    - Warning if title and author are identical (case-insensitive, trimmed)
    """

    name = "consistency"

    def validate(self, item: Any) -> ValidationResult:
        errors: list[str] = []
        warnings: list[str] = []

        if item.category is None:
            errors.append("Category is required")

        if item.medium is None:
            errors.append("Medium is required")

        if item.availability is None:
            errors.append("Availability is required")

        if item.title is not None and item.author is not None:
            if item.title.strip().casefold() == item.author.strip().casefold():
                warnings.append("Title and author are identical. Please verify the entry.")

        return ValidationResult.from_messages(errors, warnings)
