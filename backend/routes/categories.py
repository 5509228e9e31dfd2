# backend/routes/categories.py
from typing import Annotated, List
from fastapi import APIRouter, Depends, Path, Request, status
from sqlalchemy.orm import Session

from database import get_db
from utils.tokenJWT import require_admin
from utils.audit import write_log
from utils.cache import listing_cache
from models.users import User
import services.categories as categories_service
from schemas.category import CategoryCreate, CategoryUpdate, CategoryOut
from schemas.base import MAX_ID

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", response_model=List[CategoryOut])
def list_categories(db: Session = Depends(get_db)):
    return categories_service.list_categories(db)


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(category_id: Annotated[int, Path(le=MAX_ID)], db: Session = Depends(get_db)):
    return categories_service.get_category(db, category_id)


@router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CategoryCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    category = categories_service.create_category(db, payload)
    write_log(
        db, user_id=current_user.id, action="CATEGORY_CREATE", resource="categories",
        status="SUCCESS", ip=request.client.host if request.client else None,
        meta={"id": category.id, "name": category.name},
    )
    return category


# Price or name changes alter every listed product carrying the category
@router.patch("/{category_id}", response_model=CategoryOut)
def update_category(
    category_id: Annotated[int, Path(le=MAX_ID)],
    payload: CategoryUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    category = categories_service.update_category(db, category_id, payload)
    listing_cache.invalidate()
    write_log(
        db, user_id=current_user.id, action="CATEGORY_UPDATE", resource="categories",
        status="SUCCESS", ip=request.client.host if request.client else None,
        meta={"id": category.id, "fields": sorted(payload.model_fields_set)},
    )
    return category


@router.delete("/{category_id}")
def delete_category(
    category_id: Annotated[int, Path(le=MAX_ID)],
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    name = categories_service.delete_category(db, category_id)
    listing_cache.invalidate()
    write_log(
        db, user_id=current_user.id, action="CATEGORY_DELETE", resource="categories",
        status="SUCCESS", ip=request.client.host if request.client else None,
        meta={"id": category_id, "name": name},
    )
    return {"message": "Category deleted successfully"}
