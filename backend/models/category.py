# backend/models/category.py
from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, Table, Index, CheckConstraint, func
from sqlalchemy.orm import relationship
from database import Base

# Tabela łącząca produkty z kategoriami (many-to-many).
# Usunięcie produktu lub kategorii kasuje powiązania, nigdy drugą stronę.
product_categories = Table(
    "product_categories",
    Base.metadata,
    Column("product_id", Integer, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", Integer, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
    Index("product_categories_product_id_idx", "product_id"),
    Index("product_categories_category_id_idx", "category_id"),
)


# Model Category
# Tag produktu z ceną domyślną; najniższa cena spośród kategorii
# produktu jest jego ceną, o ile nie ustawiono ceny własnej.
class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    default_price = Column(
        Numeric(10, 2, asdecimal=False),
        CheckConstraint("default_price >= 0"),
        nullable=False,
        default=0,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    products = relationship(
        "Product",
        secondary=product_categories,
        back_populates="categories",
        passive_deletes=True,
    )
