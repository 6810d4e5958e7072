"""
Общие фикстуры тестов: база SQLite в памяти, клиент API,
токен администратора и тестовый каталог.
"""

import os
import tempfile
from datetime import datetime
from io import BytesIO

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["STORAGE_TYPE"] = "local"
os.environ["STORAGE_PATH"] = tempfile.mkdtemp(prefix="storefront-static-")
os.environ["CDN_BASE_URL"] = ""
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DEFAULT_GRID_CATEGORY"] = "Sneakers"

import pytest
from fastapi.testclient import TestClient
from PIL import Image
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.core.auth import auth_service
from storefront.db.database import get_db
from storefront.db.models import Base, Brand, Category, Product
from storefront.main import app
from storefront.services.cache import query_cache
from storefront.services.storage_service import LocalStorageProvider, get_storage


def png_bytes(width: int = 4, height: int = 4, color: str = "red") -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def storage(tmp_path):
    return LocalStorageProvider(str(tmp_path / "uploads"))


@pytest.fixture(autouse=True)
def clear_query_cache():
    query_cache.clear()
    yield
    query_cache.clear()


@pytest.fixture
def client(session_factory, storage):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    token = auth_service.create_access_token({"sub": "1", "is_admin": True})
    return {"Authorization": f"Bearer {token}"}


def make_product(db, name, price, category, brand, sizes, created_at, **fields):
    product = Product(
        name=name,
        price=price,
        category=category,
        brand=brand,
        created_at=created_at,
        **{key: value for key, value in fields.items() if key != "images"},
    )
    product.set_sizes(sizes)
    product.set_images(fields.get("images", []))
    db.add(product)
    return product


@pytest.fixture
def catalog_data(db):
    """
    Каталог: два бренда, две категории и четыре товара.

    В категории Sneakers три товара, в Boots один.
    """
    nike = Brand(name="Nike")
    adidas = Brand(name="Adidas")
    sneakers = Category(name="Sneakers", description="Everyday sneakers")
    boots = Category(name="Boots")
    db.add_all([nike, adidas, sneakers, boots])

    products = {
        "air_max": make_product(
            db, "Air Max 90", 120, sneakers, nike, ["40", "41", "42"],
            datetime(2024, 1, 1), sex="Men", is_new=True, show_in_slider=True,
            images=["/static/products/aa/air-max-1.jpg", "/static/products/aa/air-max-2.jpg"],
        ),
        "ultraboost": make_product(
            db, "Ultraboost", 180, sneakers, adidas, ["41", "43"],
            datetime(2024, 1, 3), sex="Women", discount_price=220, show_in_slider=True,
        ),
        "court": make_product(
            db, "Court Classic", 90, sneakers, nike, ["38"],
            datetime(2024, 1, 2), sex="Unisex", available=False,
        ),
        "trail": make_product(
            db, "Trail Boot", 200, boots, adidas, ["42"],
            datetime(2024, 1, 4), sex="Men",
        ),
    }
    db.commit()
    return {
        "brands": {"nike": nike.id, "adidas": adidas.id},
        "categories": {"sneakers": sneakers.id, "boots": boots.id},
        "products": {key: product.id for key, product in products.items()},
    }
