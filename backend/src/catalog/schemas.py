"""Pydantic schemas for catalog read models"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from domain.catalog.models import Availability, ItemCategory, ItemMedium
from domain.validation.models import ValidationResult


class CatalogStatistics(BaseModel):
    """Item counts by availability"""
    total_items: int = Field(..., ge=0)
    available_items: int = Field(..., ge=0)
    loaned_items: int = Field(..., ge=0)

    def __str__(self) -> str:
        return (
            f"Statistics: total={self.total_items}, available={self.available_items}, "
            f"loaned={self.loaned_items}"
        )


class ItemResponse(BaseModel):
    """Schema for an item as returned to outer layers"""
    id: int
    title: str
    author: str
    category: ItemCategory
    medium: ItemMedium
    availability: Availability
    version: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class LoanResponse(BaseModel):
    """Schema for a loan record"""
    id: int
    item_id: int
    borrower: Optional[str] = None
    loaned_at: datetime
    due_at: datetime
    returned_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ValidationReport(BaseModel):
    """Validation outcome for display after a rejected admission"""
    is_valid: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: ValidationResult) -> "ValidationReport":
        return cls(is_valid=result.is_valid, errors=list(result.errors), warnings=list(result.warnings))
