# backend/services/products.py
"""Catalog storage: products, their category associations, and the effective price."""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from config import settings
from database import transaction
from models.category import product_categories
from models.product import Product
from schemas.product import ProductCreate, ProductEditRequest
from services.categories import load_categories
from utils.errors import NotFoundError

# Columns that may legitimately be cleared with an explicit null
NULLABLE_FIELDS = {"custom_price"}

# Bulk category assignment modes
ASSIGN_MODES = ("add", "remove", "replace")


def clamp_limit(limit: int) -> int:
    return max(1, min(settings.PRODUCT_PAGE_MAX, limit))


def list_products(
    db: Session,
    offset: int = 0,
    limit: int = 12,
    category_ids: Optional[List[int]] = None,
    is_available: Optional[bool] = None,
) -> List[Product]:
    """Newest-first page of products, each with its full category set.

    The category filter is applied to the junction rows; a product matching
    several of the requested categories still comes back once, and a product
    without categories never matches a non-empty filter.
    """
    query = db.query(Product).options(selectinload(Product.categories))

    if category_ids:
        matching = select(product_categories.c.product_id).where(
            product_categories.c.category_id.in_(category_ids)
        )
        query = query.filter(Product.id.in_(matching))

    if is_available is not None:
        query = query.filter(Product.is_available == is_available)

    query = query.order_by(Product.created_at.desc(), Product.id.desc())
    return query.offset(max(0, offset)).limit(clamp_limit(limit)).all()


def get_product(db: Session, product_id: int) -> Product:
    product = (
        db.query(Product)
        .options(selectinload(Product.categories))
        .filter(Product.id == product_id)
        .first()
    )
    if product is None:
        raise NotFoundError("Product", product_id)
    return product


def create_product(db: Session, payload: ProductCreate) -> Product:
    with transaction(db):
        categories = load_categories(db, payload.category_ids)
        product = Product(
            name=payload.name,
            description=payload.description,
            images=list(payload.images),
            full_images=list(payload.full_images),
            is_available=payload.is_available,
            custom_price=payload.custom_price,
            categories=categories,
        )
        db.add(product)
    # Re-read so callers always get the same shape as the listing
    return get_product(db, product.id)


def update_product(db: Session, product_id: int, payload: ProductEditRequest) -> Product:
    """Partial update. ``category_ids`` replaces the category set when sent,
    otherwise the existing associations are left as they are."""
    changes = payload.model_dump(exclude_unset=True)
    category_ids = changes.pop("category_ids", None)

    with transaction(db):
        product = get_product(db, product_id)
        for key, value in changes.items():
            if value is None and key not in NULLABLE_FIELDS:
                continue
            setattr(product, key, value)
        if category_ids is not None:
            product.categories = load_categories(db, category_ids)

    return get_product(db, product_id)


def set_availability(db: Session, product_id: int, is_available: bool) -> Product:
    with transaction(db):
        product = get_product(db, product_id)
        if product.is_available != is_available:
            product.is_available = is_available
    return product


def delete_product(db: Session, product_id: int) -> str:
    """Delete a product (junction rows cascade) and return its name."""
    with transaction(db):
        product = get_product(db, product_id)
        name = product.name
        db.delete(product)
    return name


def assign_categories(db: Session, product_id: int, category_ids: List[int], mode: str = "add") -> Product:
    if mode not in ASSIGN_MODES:
        raise ValueError(f"Unknown mode '{mode}'")

    with transaction(db):
        product = get_product(db, product_id)
        categories = load_categories(db, category_ids)
        if mode == "replace":
            product.categories = categories
        elif mode == "remove":
            drop = {c.id for c in categories}
            product.categories = [c for c in product.categories if c.id not in drop]
        else:
            present = {c.id for c in product.categories}
            for category in categories:
                if category.id not in present:
                    product.categories.append(category)
    return product
