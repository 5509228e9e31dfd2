# backend/schemas/bulk.py
from typing import List, Literal
from pydantic import Field

from schemas.base import ORMBase, EntityId


class BulkAvailabilityRequest(ORMBase):
    product_ids: List[EntityId] = Field(min_length=1)
    is_available: bool


class BulkDeleteRequest(ORMBase):
    product_ids: List[EntityId] = Field(min_length=1)


class BulkAssignCategoryRequest(ORMBase):
    product_ids: List[EntityId] = Field(min_length=1)
    category_ids: List[EntityId] = Field(default_factory=list)
    # add: append missing ones, remove: drop listed ones, replace: set exactly
    mode: Literal["add", "remove", "replace"] = "add"


class BulkFailure(ORMBase):
    id: int
    reason: str


# Partition of the requested ids; every id appears exactly once
class BulkResult(ORMBase):
    succeeded: List[int] = Field(default_factory=list)
    failed: List[BulkFailure] = Field(default_factory=list)
