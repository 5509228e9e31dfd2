import argparse
import os
import sys

# Add 'backend' folder to Python path
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from database import SessionLocal, init_db
from models.category import Category
from models.product import Product
from models.users import User
from services.users import create_user

# Configuration
ADMIN_USERNAME = os.getenv("SEED_ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("SEED_ADMIN_PASSWORD", "admin123")

SAMPLE_CATEGORIES = [
    ("Heavy Jackets", 24.00),
    ("Vintage", 10.00),
    ("Denim", 8.50),
    ("Accessories", 2.00),
]

SAMPLE_PRODUCTS = [
    ("Leather Bomber", "Worn-in brown leather bomber, mixed sizes", ["Heavy Jackets", "Vintage"], None),
    ("Parka Lot", "Winter parkas, bale of 20", ["Heavy Jackets"], None),
    ("Levi's 501 Bale", "Assorted 501s, grade A", ["Denim", "Vintage"], None),
    ("Denim Jackets", "Trucker jackets, light and mid wash", ["Denim"], 12.00),
    ("Belts & Scarves", "Mixed accessories box", ["Accessories"], None),
]
# End Configuration


def seed(session) -> None:
    """Creates the admin account and sample catalog; existing rows are left alone."""
    if not session.query(User).filter(User.username == ADMIN_USERNAME).first():
        user = create_user(session, ADMIN_USERNAME, ADMIN_PASSWORD)
        print(f"Created user '{user.username}' (admin={user.is_admin})")

    by_name = {c.name: c for c in session.query(Category).all()}
    for name, price in SAMPLE_CATEGORIES:
        if name not in by_name:
            by_name[name] = Category(name=name, default_price=price)
            session.add(by_name[name])
    session.flush()

    existing = {p.name for p in session.query(Product.name).all()}
    for name, description, categories, custom_price in SAMPLE_PRODUCTS:
        if name in existing:
            continue
        session.add(Product(
            name=name,
            description=description,
            images=[],
            full_images=[],
            custom_price=custom_price,
            categories=[by_name[c] for c in categories],
        ))
    session.commit()
    print(f"Catalog: {session.query(Category).count()} categories, {session.query(Product).count()} products")


def set_category_price(session, name: str, price: float) -> bool:
    """Change one category's default price. Cart snapshots keep their old prices."""
    category = session.query(Category).filter(Category.name == name).first()
    if not category:
        print(f"Category '{name}' not found")
        return False
    print(f"Found category: {category.name} (ID: {category.id}) with current price: {category.default_price}")
    category.default_price = price
    session.commit()
    print(f"Updated '{category.name}' price to {price:.2f}")
    return True


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Seed or maintain the storefront database")
    parser.add_argument("--set-category-price", nargs=2, metavar=("NAME", "PRICE"),
                        help="update a category's default price instead of seeding")
    args = parser.parse_args(argv)

    init_db()
    session = SessionLocal()
    try:
        if args.set_category_price:
            name, price = args.set_category_price
            return 0 if set_category_price(session, name, float(price)) else 1
        seed(session)
        return 0
    finally:
        session.close()


if __name__ == "__main__":
    sys.exit(main())
