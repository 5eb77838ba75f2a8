"""Author validation rules"""

import re
from typing import Any

from domain.validation.models import ValidationResult
from domain.validation.port import ValidatorPort


AUTHOR_MIN_LENGTH = 2
AUTHOR_MAX_LENGTH = 100

# Letters (accented included), whitespace, period, hyphen, apostrophe
VALID_NAME_PATTERN = re.compile(r"^(?:[^\W\d_]|[\s.\-'])+$")
LETTER_PATTERN = re.compile(r"[^\W\d_]")
DIGITS_ONLY_PATTERN = re.compile(r"^\d+$")


class AuthorValidator(ValidatorPort):
    """Validate the author (creator) name of a catalog item."""

    name = "author"

    def validate(self, item: Any) -> ValidationResult:
        errors: list[str] = []
        warnings: list[str] = []

        author = (item.author or "").strip()
        if not author:
            return ValidationResult.failure("Author cannot be empty")

        if len(author) < AUTHOR_MIN_LENGTH:
            errors.append(f"Author name must have at least {AUTHOR_MIN_LENGTH} characters")

        if len(author) > AUTHOR_MAX_LENGTH:
            errors.append(f"Author name cannot exceed {AUTHOR_MAX_LENGTH} characters")

        if not VALID_NAME_PATTERN.match(author):
            errors.append(
                "Author name contains invalid characters. "
                "Use only letters, spaces, periods, hyphens and apostrophes."
            )

        if "  " in author:
            warnings.append("Author name contains multiple consecutive spaces.")

        if DIGITS_ONLY_PATTERN.match(author):
            errors.append("Author name cannot consist only of digits")

        if not LETTER_PATTERN.search(author):
            errors.append("Author name must contain at least one letter")

        if " " not in author and len(author) > 2:
            warnings.append("Author name is a single word. Consider adding first and last name.")

        if author.islower():
            warnings.append("Author name is entirely lower-case. Consider proper name casing.")
        elif author.isupper():
            warnings.append("Author name is entirely upper-case. Consider proper name casing.")

        return ValidationResult.from_messages(errors, warnings)
