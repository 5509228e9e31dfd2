# backend/models/cart.py
from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, Boolean, Numeric, JSON, Index, func
from sqlalchemy.orm import relationship
from database import Base

# Represents a submitted customer cart
class Cart(Base):
    __tablename__ = "carts" # Table name

    id = Column(Integer, primary_key=True, index=True) # Primary key
    customer_name = Column(String, nullable=False)
    customer_email = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False) # Creation timestamp
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # One-to-many relationship with cart items, kept in submission order
    items = relationship(
        "CartItem",
        back_populates="cart",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="CartItem.id",
    )

    __table_args__ = (
        Index("carts_created_at_idx", "created_at"),
    )

    @property
    def total(self) -> float:
        return round(sum(float(it.price or 0) for it in self.items), 2)


# Snapshot of a product taken when it was added to the cart.
# product_id is deliberately not a foreign key: the cart must stay readable
# after the product is edited or deleted.
class CartItem(Base):
    __tablename__ = "cart_items" # Table name

    id = Column(Integer, primary_key=True)
    cart_id = Column(Integer, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False) # Foreign key to parent cart
    product_id = Column(Integer, nullable=False)
    name = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    images = Column(JSON, nullable=False, default=list)
    full_images = Column(JSON, nullable=False, default=list)
    is_available = Column(Boolean, nullable=False, default=True)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False, default=0) # Price at the moment of addition
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    cart = relationship("Cart", back_populates="items") # Relationship back to Cart

    __table_args__ = (
        Index("cart_items_cart_id_idx", "cart_id"),
        Index("cart_items_product_id_idx", "product_id"),
    )
