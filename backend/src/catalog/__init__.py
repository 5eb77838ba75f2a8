"""Catalog module - service layer over the catalog domain"""

from .service import CatalogService
from .search import (
    SearchStrategy,
    SearchByTitle,
    SearchByAuthor,
    SearchByCategory,
    get_strategy,
    parse_category,
)
from .schemas import CatalogStatistics, ItemResponse, LoanResponse, ValidationReport

__all__ = [
    "CatalogService",
    "SearchStrategy",
    "SearchByTitle",
    "SearchByAuthor",
    "SearchByCategory",
    "get_strategy",
    "parse_category",
    "CatalogStatistics",
    "ItemResponse",
    "LoanResponse",
    "ValidationReport",
]
