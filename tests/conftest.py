import os
import tempfile

# Configure the app before anything imports config/database
_tmpdir = tempfile.mkdtemp(prefix="storefront-tests-")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_tmpdir, "test.db")
os.environ["ENVIRONMENT"] = "test"
os.environ["RETRY_BACKOFF_SECONDS"] = "0"
os.environ["ADMIN_SECRET_CODE"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

from database import Base, SessionLocal, engine
from main import app
from utils.cache import listing_cache

ADMIN = {"username": "admin", "password": "admin-pass"}
CUSTOMER = {"username": "buyer", "password": "buyer-pass"}


@pytest.fixture(autouse=True)
def fresh_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    listing_cache.invalidate()
    yield
    listing_cache.invalidate()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def _logged_in_client(credentials):
    c = TestClient(app)
    r = c.post("/api/register", json=credentials)
    assert r.status_code == 201, r.text
    r = c.post("/api/login", json=credentials)
    assert r.status_code == 200, r.text
    return c


@pytest.fixture
def admin_client():
    # First account ever registered becomes admin
    with _logged_in_client(ADMIN) as c:
        yield c


@pytest.fixture
def customer_client(admin_client):
    with _logged_in_client(CUSTOMER) as c:
        yield c


@pytest.fixture
def make_category(admin_client):
    def _make(name, default_price=0):
        r = admin_client.post("/api/categories", json={"name": name, "defaultPrice": default_price})
        assert r.status_code == 201, r.text
        return r.json()
    return _make


@pytest.fixture
def make_product(admin_client):
    def _make(name="Product", category_ids=(), **fields):
        body = {"name": name, "description": f"{name} description", "images": ["data:image/jpeg;base64,AAAA"]}
        body["categoryIds"] = list(category_ids)
        body.update(fields)
        r = admin_client.post("/api/products", json=body)
        assert r.status_code == 201, r.text
        return r.json()
    return _make


@pytest.fixture
def cart_item():
    """Builds the snapshot of a product the storefront would submit."""
    def _item(product, price=None):
        return {
            "productId": product["id"],
            "name": product["name"],
            "description": product["description"],
            "images": product["images"],
            "fullImages": product["fullImages"],
            "isAvailable": product["isAvailable"],
            "price": product["price"] if price is None else price,
        }
    return _item
