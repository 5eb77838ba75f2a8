"""Title validation rules"""

from typing import Any

from domain.validation.models import ValidationResult
from domain.validation.port import ValidatorPort


TITLE_MIN_LENGTH = 1
TITLE_MAX_LENGTH = 200
TITLE_WARNING_LENGTH = 100
TITLE_UPPERCASE_WARNING_LENGTH = 10

# Characters that break HTML rendering of catalog listings
FORBIDDEN_TITLE_CHARACTERS = frozenset('<>"\'&')


class TitleValidator(ValidatorPort):
    """Validate the title of a catalog item.

    Rules implemented:
    - Title must not be empty after trimming
    - Trimmed length must be within [1, 200] (warning above 100)
    - Title must not contain < > " ' &
    - Warning if title is only digits
    - Warning if title is fully upper-case and longer than 10 characters
    """

    name = "title"

    def validate(self, item: Any) -> ValidationResult:
        errors: list[str] = []
        warnings: list[str] = []

        title = (item.title or "").strip()
        if not title:
            return ValidationResult.failure("Title cannot be empty")

        if len(title) < TITLE_MIN_LENGTH:
            errors.append(f"Title must have at least {TITLE_MIN_LENGTH} character")

        if len(title) > TITLE_MAX_LENGTH:
            errors.append(f"Title cannot exceed {TITLE_MAX_LENGTH} characters")

        if len(title) > TITLE_WARNING_LENGTH:
            warnings.append(
                f"Title is very long ({len(title)} characters). Consider shortening it."
            )

        if any(char in FORBIDDEN_TITLE_CHARACTERS for char in title):
            errors.append("Title contains forbidden characters (<, >, \", ', &)")

        if title.isdigit():
            warnings.append("Title contains only digits. Consider adding descriptive text.")

        if title.isupper() and len(title) > TITLE_UPPERCASE_WARNING_LENGTH:
            warnings.append("Title is entirely upper-case. Consider using title case.")

        return ValidationResult.from_messages(errors, warnings)
