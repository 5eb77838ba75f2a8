"""SQLAlchemy Models for the catalog record store"""

from .base import Base
from .catalog_item import CatalogItem
from .loan_record import LoanRecord

__all__ = [
    "Base",
    "CatalogItem",
    "LoanRecord",
]
