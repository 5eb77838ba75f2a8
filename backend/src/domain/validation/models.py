"""Validation result value type for catalog item admission"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Union


def _as_tuple(messages: Union[str, Iterable[str], None]) -> tuple[str, ...]:
    if messages is None:
        return ()
    if isinstance(messages, str):
        return (messages,)
    return tuple(messages)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one item against one or more rules.

    Instances are immutable. Use the named constructors instead of calling
    the class directly:

        ValidationResult.success()
        ValidationResult.success_with_warnings(["Title is very long"])
        ValidationResult.failure(["Title cannot be empty"])

    Invariant: ``is_valid`` is False if and only if ``errors`` is non-empty.
    Warnings never affect validity.
    """
    is_valid: bool
    errors: tuple[str, ...] = field(default_factory=tuple)
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "errors", _as_tuple(self.errors))
        object.__setattr__(self, "warnings", _as_tuple(self.warnings))
        if self.is_valid == bool(self.errors):
            raise ValueError(
                f"Inconsistent validation result: is_valid={self.is_valid} "
                f"with {len(self.errors)} error(s)"
            )

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def success_with_warnings(cls, warnings: Union[str, Iterable[str]]) -> "ValidationResult":
        return cls(is_valid=True, warnings=_as_tuple(warnings))

    @classmethod
    def failure(
        cls,
        errors: Union[str, Iterable[str]],
        warnings: Union[str, Iterable[str], None] = None
    ) -> "ValidationResult":
        """Create a failed result.

        Args:
            errors: A single error message or an iterable of messages (must not be empty)
            warnings: Optional warnings collected alongside the errors

        Raises:
            ValueError: If no error message is given
        """
        errors = _as_tuple(errors)
        if not errors:
            raise ValueError("A failed validation result needs at least one error")
        return cls(is_valid=False, errors=errors, warnings=_as_tuple(warnings))

    @classmethod
    def from_messages(cls, errors: Iterable[str], warnings: Iterable[str]) -> "ValidationResult":
        """Build the right kind of result from accumulated rule messages."""
        errors = tuple(errors)
        warnings = tuple(warnings)
        if errors:
            return cls.failure(errors, warnings)
        if warnings:
            return cls.success_with_warnings(warnings)
        return cls.success()

    def combine(self, other: "ValidationResult") -> "ValidationResult":
        """Return a new result ANDing validity and concatenating messages in order."""
        return ValidationResult(
            is_valid=self.is_valid and other.is_valid,
            errors=self.errors + other.errors,
            warnings=self.warnings + other.warnings
        )

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def summary(self) -> str:
        lines = ["Validation passed" if self.is_valid else "Validation failed"]
        if self.errors:
            lines.append("Errors:")
            lines.extend(f"  - {error}" for error in self.errors)
        if self.warnings:
            lines.append("Warnings:")
            lines.extend(f"  - {warning}" for warning in self.warnings)
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary for outer layers"""
        return {
            "is_valid": self.is_valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings)
        }

    def __str__(self) -> str:
        return self.summary()
