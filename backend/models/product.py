# backend/models/product.py
from sqlalchemy import Column, Integer, String, Boolean, Numeric, DateTime, JSON, CheckConstraint, Index, func
from sqlalchemy.orm import relationship
from database import Base
from models.category import product_categories

# Model Product
# Pozycja katalogu: opis, zdjęcia (podglądy i pełna rozdzielczość jako
# zakodowane ciągi), dostępność oraz opcjonalna cena własna.
class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")

    images = Column(JSON, nullable=False, default=list)
    full_images = Column(JSON, nullable=False, default=list)

    is_available = Column(Boolean, nullable=False, default=True)
    # Nadpisuje cenę wynikającą z kategorii.
    custom_price = Column(Numeric(10, 2, asdecimal=False), CheckConstraint("custom_price >= 0"), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    categories = relationship(
        "Category",
        secondary=product_categories,
        back_populates="products",
        order_by="Category.id",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("name_idx", "name"),
        Index("availability_idx", "is_available"),
        Index("created_at_idx", "created_at"),
    )

    @property
    def price(self) -> float:
        """Effective price: custom override, else cheapest category default, else 0."""
        if self.custom_price is not None:
            return float(self.custom_price)
        prices = [c.default_price for c in self.categories if c.default_price is not None]
        return float(min(prices)) if prices else 0.0
