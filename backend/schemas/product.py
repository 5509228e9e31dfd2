# backend/schemas/product.py
from datetime import datetime
from typing import Optional, List
from pydantic import Field

from schemas.base import ORMBase, EntityId, MAX_PRICE
from schemas.category import CategoryOut


# Shared base attributes for product entities
class ProductBase(ORMBase):
    name: str = Field(min_length=1)
    description: str = ""
    images: List[str] = Field(default_factory=list)
    full_images: List[str] = Field(default_factory=list)
    is_available: bool = True
    custom_price: Optional[float] = Field(default=None, ge=0, le=MAX_PRICE)


# Schema for creating a new product
class ProductCreate(ProductBase):
    category_ids: List[EntityId] = Field(default_factory=list)


# Schema for partial product updates
class ProductEditRequest(ORMBase):
    """Schema for PATCH requests - all fields optional.

    ``category_ids`` present (even empty) replaces the product's categories;
    absent leaves them untouched.
    """
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    images: Optional[List[str]] = None
    full_images: Optional[List[str]] = None
    is_available: Optional[bool] = None
    custom_price: Optional[float] = Field(None, ge=0, le=MAX_PRICE)
    category_ids: Optional[List[EntityId]] = None


# Full product representation including categories and effective price
class ProductOut(ProductBase):
    id: int
    price: float
    created_at: Optional[datetime] = None
    categories: List[CategoryOut] = Field(default_factory=list)


# Infinite-scroll page; nextPage is null on the last page
class ProductListPage(ORMBase):
    data: List[ProductOut]
    next_page: Optional[int] = None
    last_page: bool
