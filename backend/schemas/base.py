# backend/schemas/base.py
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Integer primary keys and Numeric(10, 2) money columns
MAX_ID = 2**31 - 1
MAX_PRICE = 99_999_999.99

EntityId = Annotated[int, Field(le=MAX_ID)]


# Base configuration: ORM compatibility and camelCase JSON on the wire,
# while Python code keeps snake_case attribute names
class ORMBase(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
