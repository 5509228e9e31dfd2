from pydantic import Field
from typing import Optional

from schemas.base import ORMBase

# Schema for user authentication credentials
class UserLogin(ORMBase):
    username: str
    password: str

# Schema for user registration requests
class UserCreate(UserLogin):
    username: str = Field(min_length=3, max_length=64)
    password: str = Field(min_length=6)
    # Matching the configured admin code grants admin rights
    secret_code: Optional[str] = None

# Output schema for user profile details
class UserResponse(ORMBase):
    id: int
    username: str
    is_admin: bool

# Schema for JWT authentication token response
class Token(ORMBase):
    access_token: str
    token_type: str = "bearer"
