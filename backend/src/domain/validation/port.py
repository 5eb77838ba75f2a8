"""ValidatorPort interface for catalog item rules"""

from abc import ABC, abstractmethod
from typing import Any

from .models import ValidationResult


class ValidatorPort(ABC):
    """Port interface for a single-responsibility item check.

    Implementations inspect one item and report every problem they find in a
    single ValidationResult. They must not mutate the item or touch any
    external resource.
    """

    name: str = "validator"

    @abstractmethod
    def validate(self, item: Any) -> ValidationResult:
        """Validate an item and return the accumulated result.

        Args:
            item: Catalog item (domain model) to inspect

        Returns:
            ValidationResult with all errors and warnings of this rule set
        """
        pass

    def should_continue(self, result: ValidationResult) -> bool:
        """Whether the pipeline should run the next stage after this one.

        Defaults to True so the pipeline collects every error.
        """
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
