"""Validation domain module.

Implements the admission checks a catalog item must pass before it is
persisted: independent validators combined by an ordered pipeline.
"""

from .models import ValidationResult
from .port import ValidatorPort
from .rules import TitleValidator, AuthorValidator, ConsistencyValidator
from .engine import ValidationPipeline, default_validators

__all__ = [
    "ValidationResult",
    "ValidatorPort",
    "TitleValidator",
    "AuthorValidator",
    "ConsistencyValidator",
    "ValidationPipeline",
    "default_validators",
]
