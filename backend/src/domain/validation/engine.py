"""ValidationPipeline - runs item validators in a fixed order"""

from typing import Any, Iterable, Optional
import logging

from .models import ValidationResult
from .port import ValidatorPort
from .rules import TitleValidator, AuthorValidator, ConsistencyValidator


logger = logging.getLogger(__name__)


def default_validators() -> tuple[ValidatorPort, ...]:
    """Standard admission order: title, author, consistency."""
    return (TitleValidator(), AuthorValidator(), ConsistencyValidator())


class ValidationPipeline:
    """Ordered, immutable chain of validators.

    Every stage runs and its result is combined into the overall result,
    even when earlier stages failed, so callers see all problems at once.
    A stage can stop the chain by returning False from should_continue();
    none of the built-in validators do.
    """

    def __init__(self, validators: Optional[Iterable[ValidatorPort]] = None):
        self._validators = tuple(validators) if validators is not None else default_validators()

    @property
    def validators(self) -> tuple[ValidatorPort, ...]:
        return self._validators

    def run(self, item: Any) -> ValidationResult:
        """Run all validators on an item.

        If a validator raises, the exception is logged and recorded as an
        error for that stage, so a broken rule can never let an item through.

        Args:
            item: Catalog item to validate

        Returns:
            Combined ValidationResult across all executed stages
        """
        result = ValidationResult.success()

        for validator in self._validators:
            try:
                stage_result = validator.validate(item)
            except Exception as e:
                logger.error(
                    f"Validator '{validator.name}' failed for item '{getattr(item, 'title', None)}': {e}",
                    exc_info=True
                )
                stage_result = ValidationResult.failure(
                    f"Validator '{validator.name}' failed to execute"
                )

            logger.debug(
                f"Validator '{validator.name}' produced {len(stage_result.errors)} errors "
                f"and {len(stage_result.warnings)} warnings"
            )
            result = result.combine(stage_result)

            if not validator.should_continue(stage_result):
                logger.info(f"Validator '{validator.name}' stopped the validation pipeline")
                break

        return result

    # Alias used by callers that think of the pipeline as a single validator
    validate = run
