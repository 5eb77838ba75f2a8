"""Validation rules implementations.

Each rule module contains one validator that reports every problem it
finds for a catalog item as a single ValidationResult.
"""

from .title_rules import TitleValidator
from .author_rules import AuthorValidator
from .consistency_rules import ConsistencyValidator

__all__ = [
    "TitleValidator",
    "AuthorValidator",
    "ConsistencyValidator",
]
