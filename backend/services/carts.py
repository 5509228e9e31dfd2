# backend/services/carts.py
import logging
from typing import List

from sqlalchemy.orm import Session, selectinload

from database import transaction
from models.cart import Cart, CartItem
from models.product import Product
from schemas.cart import CartCreate
from utils.errors import NotFoundError

logger = logging.getLogger(__name__)

CART_LIST_MAX = 100


def list_carts(db: Session, limit: int = 50) -> List[Cart]:
    limit = max(1, min(CART_LIST_MAX, limit))
    return (
        db.query(Cart)
        .options(selectinload(Cart.items))
        .order_by(Cart.created_at.desc(), Cart.id.desc())
        .limit(limit)
        .all()
    )


def get_cart(db: Session, cart_id: int) -> Cart:
    cart = (
        db.query(Cart)
        .options(selectinload(Cart.items))
        .filter(Cart.id == cart_id)
        .first()
    )
    if cart is None:
        raise NotFoundError("Cart", cart_id)
    return cart


def create_cart(db: Session, payload: CartCreate) -> Cart:
    """Persist the cart and all of its item snapshots as one unit.

    Items are stored exactly as submitted; the same product may appear twice.
    """
    with transaction(db):
        cart = Cart(customer_name=payload.customer_name, customer_email=str(payload.customer_email))
        db.add(cart)
        db.flush()
        for item in payload.items:
            db.add(CartItem(
                cart_id=cart.id,
                product_id=item.product_id,
                name=item.name,
                description=item.description,
                images=list(item.images),
                full_images=list(item.full_images),
                is_available=item.is_available,
                price=item.price,
            ))
        db.flush()
    return get_cart(db, cart.id)


def delete_cart(db: Session, cart_id: int) -> int:
    """Delete a cart together with its items; returns how many items went with it."""
    with transaction(db):
        cart = get_cart(db, cart_id)
        count = len(cart.items)
        db.delete(cart)
    return count


def product_ids(cart: Cart) -> List[int]:
    """Distinct product ids referenced by the cart, in item order."""
    return list(dict.fromkeys(it.product_id for it in cart.items))


def refresh_item_availability(db: Session, cart_id: int) -> int:
    """Copy current product availability onto the cart's item snapshots.

    Items whose product no longer exists are marked unavailable. Prices are
    never touched. Returns the number of items changed.
    """
    changed = 0
    with transaction(db):
        cart = get_cart(db, cart_id)
        ids = product_ids(cart)
        current = {
            pid: available
            for pid, available in db.query(Product.id, Product.is_available).filter(Product.id.in_(ids))
        }
        for item in cart.items:
            available = current.get(item.product_id, False)
            if item.is_available != available:
                item.is_available = available
                changed += 1
    return changed
