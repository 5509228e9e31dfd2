# backend/models/users.py
from sqlalchemy import Column, Integer, String, Boolean
from database import Base

# Represents a user account; admins manage the catalog and see carts
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False)
