# backend/services/users.py
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from config import settings
from database import transaction
from models.users import User
from utils.errors import ConflictError
from utils.hashing import get_password_hash, verify_password


def get_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(func.lower(User.username) == username.strip().lower()).first()


def create_user(db: Session, username: str, password: str, secret_code: Optional[str] = None) -> User:
    """Create an account. The very first account, or one registered with the
    configured admin code, gets admin rights."""
    username = username.strip()
    if get_by_username(db, username):
        raise ConflictError("Username already exists")

    is_first = db.query(User.id).first() is None
    with_code = bool(settings.ADMIN_SECRET_CODE) and secret_code == settings.ADMIN_SECRET_CODE

    user = User(
        username=username,
        password_hash=get_password_hash(password),
        is_admin=is_first or with_code,
    )
    try:
        with transaction(db):
            db.add(user)
    except IntegrityError as e:
        raise ConflictError("Username already exists") from e
    db.refresh(user)
    return user


def authenticate(db: Session, username: str, password: str) -> Optional[User]:
    user = get_by_username(db, username)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user
