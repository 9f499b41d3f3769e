"""
Pydantic schemas for Category entity.
"""
from pydantic import field_validator
from typing import List, Optional
from datetime import datetime
from decimal import Decimal
from ledger.schemas.common import CamelModel

MAX_CATEGORY_NAME_LENGTH = 64
MAX_CATEGORY_DESCRIPTION_LENGTH = 256


class CategoryCreate(CamelModel):
    """Schema for category creation."""
    name: str
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Please enter a category name")
        if len(v) > MAX_CATEGORY_NAME_LENGTH:
            raise ValueError(f"Category name must be at most {MAX_CATEGORY_NAME_LENGTH} characters")
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        if not v:
            return None
        if len(v) > MAX_CATEGORY_DESCRIPTION_LENGTH:
            raise ValueError(f"Description must be at most {MAX_CATEGORY_DESCRIPTION_LENGTH} characters")
        return v


class CategoryResponse(CamelModel):
    """Schema for category response."""
    id: int
    name: str
    description: Optional[str] = None
    created_at: datetime


class CategorySummary(CategoryResponse):
    """Category with entry count and balance across people."""
    entry_count: int
    balance: Decimal


class UncategorizedSummary(CamelModel):
    """Entries with no category, including those detached by category deletion."""
    entry_count: int
    balance: Decimal


class CategoryListResponse(CamelModel):
    """Schema for the category listing."""
    categories: List[CategorySummary] = []
    uncategorized: UncategorizedSummary
