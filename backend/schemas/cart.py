from datetime import datetime
from pydantic import Field, EmailStr
from typing import List, Optional

from schemas.base import ORMBase, EntityId, MAX_PRICE
from schemas.bulk import BulkFailure


# Snapshot of a product as the customer saw it when adding it to the cart
class CartItemIn(ORMBase):
    product_id: EntityId
    name: str = Field(min_length=1)
    description: str = ""
    images: List[str] = Field(default_factory=list)
    full_images: List[str] = Field(default_factory=list)
    is_available: bool = True
    price: float = Field(default=0, ge=0, le=MAX_PRICE)

# Request schema for submitting a cart
class CartCreate(ORMBase):
    customer_name: str = Field(min_length=1)
    customer_email: EmailStr
    items: List[CartItemIn] = Field(min_length=1)

# Response schema for a single cart line item
class CartItemOut(CartItemIn):
    id: int
    created_at: Optional[datetime] = None

# Response schema for a stored cart
class CartOut(ORMBase):
    id: int
    customer_name: str
    customer_email: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    items: List[CartItemOut]
    total: float

class CartListPage(ORMBase):
    data: List[CartOut]
    count: int

# Result of marking a cart's products unavailable
class CartItemsUnavailableResult(ORMBase):
    message: str
    succeeded: List[int]
    failed: List[BulkFailure]
