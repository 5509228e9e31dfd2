# backend/schemas/category.py
from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator

from schemas.base import ORMBase, MAX_PRICE


# Schema for creating a new category
class CategoryCreate(ORMBase):
    name: str = Field(min_length=1, max_length=100)
    default_price: float = Field(default=0, ge=0, le=MAX_PRICE)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name must not be blank")
        return v


# Schema for partial category updates
class CategoryUpdate(ORMBase):
    """Schema for PATCH requests - all fields optional."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    default_price: Optional[float] = Field(None, ge=0, le=MAX_PRICE)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Name must not be blank")
        return v


class CategoryOut(ORMBase):
    id: int
    name: str
    default_price: float
    created_at: Optional[datetime] = None
