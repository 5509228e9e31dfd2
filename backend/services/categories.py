# backend/services/categories.py
from typing import List

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import transaction
from models.category import Category
from schemas.category import CategoryCreate, CategoryUpdate
from utils.errors import ConflictError, NotFoundError


def list_categories(db: Session) -> List[Category]:
    return db.query(Category).order_by(Category.name.asc()).all()


def get_category(db: Session, category_id: int) -> Category:
    category = db.get(Category, category_id)
    if category is None:
        raise NotFoundError("Category", category_id)
    return category


def load_categories(db: Session, category_ids) -> List[Category]:
    """Fetch categories in the given order; any unknown id is a NotFoundError."""
    ids = list(dict.fromkeys(category_ids or []))
    if not ids:
        return []
    found = {c.id: c for c in db.query(Category).filter(Category.id.in_(ids)).all()}
    for cid in ids:
        if cid not in found:
            raise NotFoundError("Category", cid)
    return [found[cid] for cid in ids]


def _ensure_name_free(db: Session, name: str, exclude_id=None) -> None:
    query = db.query(Category).filter(func.lower(Category.name) == name.lower())
    if exclude_id is not None:
        query = query.filter(Category.id != exclude_id)
    if query.first():
        raise ConflictError(f"Category '{name}' already exists")


def create_category(db: Session, payload: CategoryCreate) -> Category:
    _ensure_name_free(db, payload.name)
    category = Category(name=payload.name, default_price=payload.default_price)
    try:
        with transaction(db):
            db.add(category)
    except IntegrityError as e:
        # lost a race against a concurrent insert of the same name
        raise ConflictError(f"Category '{payload.name}' already exists") from e
    db.refresh(category)
    return category


def update_category(db: Session, category_id: int, payload: CategoryUpdate) -> Category:
    category = get_category(db, category_id)
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in changes:
        _ensure_name_free(db, changes["name"], exclude_id=category.id)
    try:
        with transaction(db):
            for key, value in changes.items():
                setattr(category, key, value)
    except IntegrityError as e:
        raise ConflictError(f"Category '{changes.get('name')}' already exists") from e
    db.refresh(category)
    return category


def delete_category(db: Session, category_id: int) -> str:
    """Delete a category; product associations cascade, products stay."""
    with transaction(db):
        category = get_category(db, category_id)
        name = category.name
        db.delete(category)
    return name
