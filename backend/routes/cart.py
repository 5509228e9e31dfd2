# backend/routes/cart.py
import logging
from typing import Annotated
from fastapi import APIRouter, BackgroundTasks, Depends, Path, Query, Request, status
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from database import get_db, session_scope
from utils.tokenJWT import require_admin
from utils.audit import write_log, write_log_detached
from utils.batch import run_in_batches
from utils.cache import listing_cache
from utils.retry import db_retry
from models.users import User
import services.carts as carts_service
import services.products as products_service
from schemas.cart import CartCreate, CartOut, CartListPage, CartItemsUnavailableResult
from schemas.base import MAX_ID

router = APIRouter(prefix="/carts", tags=["Cart"])
logger = logging.getLogger(__name__)


@router.get("", response_model=CartListPage)
def list_carts(
    limit: int = Query(50, ge=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    carts = carts_service.list_carts(db, limit=limit)
    return {"data": carts, "count": len(carts)}


@router.get("/{cart_id}", response_model=CartOut)
def get_cart(
    cart_id: Annotated[int, Path(le=MAX_ID)],
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    return carts_service.get_cart(db, cart_id)


# Public: customers submit their whole cart in one request
@router.post("", response_model=CartOut, status_code=status.HTTP_201_CREATED)
def submit_cart(
    payload: CartCreate,
    request: Request,
    db: Session = Depends(get_db),
):
    cart = carts_service.create_cart(db, payload)
    logger.info("Cart %s submitted by %s with %d items", cart.id, cart.customer_email, len(cart.items))
    write_log(
        db, user_id=None, action="CART_SUBMIT", resource="cart", status="SUCCESS",
        ip=request.client.host if request.client else None,
        meta={"cart_id": cart.id, "items": len(payload.items), "total": cart.total},
    )
    return cart


@router.delete("/{cart_id}")
def delete_cart(
    cart_id: Annotated[int, Path(le=MAX_ID)],
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    items = carts_service.delete_cart(db, cart_id)
    write_log(
        db, user_id=current_user.id, action="CART_DELETE", resource="cart", status="SUCCESS",
        ip=request.client.host if request.client else None,
        meta={"cart_id": cart_id, "items": items},
    )
    return {"message": "Cart deleted successfully"}


def _refresh_cart_items(cart_id: int) -> None:
    # Runs after the response; the cart copy is a convenience, so only log failures
    try:
        with session_scope() as db:
            changed = carts_service.refresh_item_availability(db, cart_id)
        logger.info("Cart %s: refreshed availability of %d items", cart_id, changed)
    except Exception:
        logger.exception("Cart %s: failed to refresh item availability", cart_id)


@router.post("/{cart_id}/make-items-unavailable", response_model=CartItemsUnavailableResult)
async def make_items_unavailable(
    cart_id: Annotated[int, Path(le=MAX_ID)],
    request: Request,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(require_admin),
):
    def _cart_product_ids():
        with session_scope() as db:
            return carts_service.product_ids(carts_service.get_cart(db, cart_id))

    product_ids = await run_in_threadpool(_cart_product_ids)

    def _mark_unavailable(product_id: int):
        @db_retry()
        def _attempt():
            with session_scope() as db:
                products_service.set_availability(db, product_id, False)
        _attempt()

    result = await run_in_batches(product_ids, _mark_unavailable)
    listing_cache.invalidate()
    background_tasks.add_task(_refresh_cart_items, cart_id)

    message = f"Successfully updated {len(result.succeeded)} products"
    if result.failed:
        message += f", failed to update {len(result.failed)} products"

    await run_in_threadpool(
        write_log_detached,
        user_id=current_user.id, action="CART_ITEMS_UNAVAILABLE", resource="cart",
        status="SUCCESS" if not result.failed else "PARTIAL",
        ip=request.client.host if request.client else None,
        meta={"cart_id": cart_id, "succeeded": result.succeeded, "failed": [f.id for f in result.failed]},
    )
    return {"message": message, "succeeded": result.succeeded, "failed": result.failed}
