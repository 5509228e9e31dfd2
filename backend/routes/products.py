# backend/routes/products.py
from typing import Annotated, Optional, List
from fastapi import APIRouter, Depends, Path, Query, Request, status
from fastapi.exceptions import RequestValidationError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from database import get_db, session_scope
from utils.tokenJWT import require_admin
from utils.audit import write_log, write_log_detached
from utils.batch import run_in_batches
from utils.cache import listing_cache
from models.users import User
import services.products as products_service
from services.categories import load_categories
import schemas.product as product_schemas
from schemas.base import MAX_ID
from schemas.bulk import (
    BulkAvailabilityRequest, BulkDeleteRequest, BulkAssignCategoryRequest, BulkResult,
)

router = APIRouter(tags=["Products"])


# ---- HELPERS ----
def _client_ip(request: Request) -> Optional[str]:
    return request.client.host if request.client else None

def _parse_ids(raw: Optional[List[str]]) -> List[int]:
    """Accept ?categoryId=1&categoryId=2 as well as ?categoryId=1,2."""
    ids: List[int] = []
    for chunk in raw or []:
        for part in chunk.split(","):
            part = part.strip()
            if not part:
                continue
            try:
                value = int(part)
            except ValueError:
                raise _invalid_category_id(part, "Input should be a valid integer", "int_parsing")
            if value > MAX_ID:
                raise _invalid_category_id(part, f"Input should be less than or equal to {MAX_ID}", "less_than_equal")
            ids.append(value)
    return list(dict.fromkeys(ids))

def _invalid_category_id(value: str, msg: str, error_type: str) -> RequestValidationError:
    return RequestValidationError([
        {"type": error_type, "loc": ("query", "categoryId"), "msg": msg, "input": value},
    ])


# =========================
# LISTA PRODUKTÓW (infinite scroll)
# =========================
@router.get("/products", response_model=product_schemas.ProductListPage)
def list_products(
    page: int = Query(1, ge=1, le=MAX_ID),
    limit: int = Query(12, ge=1),
    category_id: Optional[List[str]] = Query(None, alias="categoryId"),
    is_available: Optional[bool] = Query(None, alias="isAvailable"),
    db: Session = Depends(get_db),
):
    limit = products_service.clamp_limit(limit)
    offset = (page - 1) * limit
    category_ids = _parse_ids(category_id)

    key = listing_cache.key(offset, limit, category_ids, is_available)
    cached = listing_cache.get(key)
    if cached is not None:
        return cached

    generation = listing_cache.generation
    items = products_service.list_products(
        db, offset=offset, limit=limit, category_ids=category_ids, is_available=is_available,
    )
    # A full page means there may be more; exact at every boundary but the last
    full = len(items) == limit
    out = product_schemas.ProductListPage(
        data=[product_schemas.ProductOut.model_validate(p) for p in items],
        next_page=page + 1 if full else None,
        last_page=not full,
    )
    listing_cache.set(key, out, generation)
    return out


# =========================
# POJEDYNCZY PRODUKT
# =========================
@router.get("/products/{product_id}", response_model=product_schemas.ProductOut)
def get_product(product_id: Annotated[int, Path(le=MAX_ID)], db: Session = Depends(get_db)):
    return products_service.get_product(db, product_id)


# =========================
# DODAWANIE PRODUKTU
# =========================
@router.post("/products", response_model=product_schemas.ProductOut, status_code=status.HTTP_201_CREATED)
def add_product(
    payload: product_schemas.ProductCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    product = products_service.create_product(db, payload)
    listing_cache.invalidate()

    write_log(
        db, user_id=current_user.id, action="PRODUCT_CREATE", resource="products",
        status="SUCCESS", ip=_client_ip(request),
        meta={"id": product.id, "categories": [c.id for c in product.categories]},
    )
    return product


# =========================
# CZĘŚCIOWA EDYCJA PRODUKTU (PATCH)
# =========================
@router.patch("/products/{product_id}", response_model=product_schemas.ProductOut)
def edit_product(
    product_id: Annotated[int, Path(le=MAX_ID)],
    payload: product_schemas.ProductEditRequest,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    product = products_service.update_product(db, product_id, payload)
    listing_cache.invalidate()

    write_log(
        db, user_id=current_user.id, action="PRODUCT_EDIT", resource="products",
        status="SUCCESS", ip=_client_ip(request),
        meta={"product_id": product.id, "fields": sorted(payload.model_fields_set)},
    )
    return product


# =========================
# USUWANIE
# =========================
@router.delete("/products/{product_id}")
def delete_product(
    product_id: Annotated[int, Path(le=MAX_ID)],
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    name = products_service.delete_product(db, product_id)
    listing_cache.invalidate()
    write_log(db, user_id=current_user.id, action="PRODUCT_DELETE", resource="products",
              status="SUCCESS", ip=_client_ip(request), meta={"id": product_id})
    return {"message": f"Product '{name}' deleted"}


# =========================
# OPERACJE MASOWE
# =========================
def _audit_bulk(current_user: User, request: Request, action: str, result: BulkResult, **extra):
    return run_in_threadpool(
        write_log_detached,
        user_id=current_user.id, action=action, resource="products",
        status="SUCCESS" if not result.failed else "PARTIAL",
        ip=_client_ip(request),
        meta={"succeeded": result.succeeded, "failed": [f.id for f in result.failed], **extra},
    )


@router.post("/products/bulk-availability", response_model=BulkResult)
async def bulk_set_availability(
    payload: BulkAvailabilityRequest,
    request: Request,
    current_user: User = Depends(require_admin),
):
    def _apply(product_id: int):
        with session_scope() as db:
            products_service.set_availability(db, product_id, payload.is_available)

    result = await run_in_batches(payload.product_ids, _apply)
    listing_cache.invalidate()
    await _audit_bulk(current_user, request, "PRODUCT_BULK_AVAILABILITY", result,
                      is_available=payload.is_available)
    return result


@router.post("/products/bulk-delete", response_model=BulkResult)
async def bulk_delete(
    payload: BulkDeleteRequest,
    request: Request,
    current_user: User = Depends(require_admin),
):
    def _apply(product_id: int):
        with session_scope() as db:
            products_service.delete_product(db, product_id)

    result = await run_in_batches(payload.product_ids, _apply)
    listing_cache.invalidate()
    await _audit_bulk(current_user, request, "PRODUCT_BULK_DELETE", result)
    return result


@router.post("/products/bulk-assign-category", response_model=BulkResult)
async def bulk_assign_category(
    payload: BulkAssignCategoryRequest,
    request: Request,
    current_user: User = Depends(require_admin),
):
    # Unknown categories reject the whole request before any product is touched
    def _check_categories():
        with session_scope() as db:
            load_categories(db, payload.category_ids)

    await run_in_threadpool(_check_categories)

    def _apply(product_id: int):
        with session_scope() as db:
            products_service.assign_categories(db, product_id, payload.category_ids, payload.mode)

    result = await run_in_batches(payload.product_ids, _apply)
    listing_cache.invalidate()
    await _audit_bulk(current_user, request, "PRODUCT_BULK_CATEGORY", result,
                      category_ids=payload.category_ids, mode=payload.mode)
    return result
