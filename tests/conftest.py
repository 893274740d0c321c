import os

os.environ.setdefault("POSTGRES_USER", "chocostore")
os.environ.setdefault("POSTGRES_PASSWORD", "chocostore")
os.environ.setdefault("POSTGRES_DB", "chocostore_test")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("R2_PUBLIC_BASE", "https://cdn.example.test")
os.environ.setdefault("ENV", "test")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import chocostore.models  # noqa: F401
from chocostore.database import get_session
from chocostore.main import app
from chocostore.models.admin_user import AdminUser
from chocostore.models.category import Category
from chocostore.models.delivery_state import DeliveryState
from chocostore.models.product import Product
from chocostore.models.product_size import ProductSize
from chocostore.services import r2_client
from chocostore.utils.hash import hash_password
from chocostore.utils.token import create_access_token


class FakeS3:
    """Stands in for the boto3 client; keeps uploaded objects in a dict."""

    def __init__(self):
        self.objects = {}
        self.deleted = []

    def upload_fileobj(self, fileobj, bucket, key, ExtraArgs=None):
        self.objects[key] = {
            "bucket": bucket,
            "body": fileobj.read(),
            "content_type": (ExtraArgs or {}).get("ContentType"),
        }

    def delete_object(self, Bucket, Key):
        self.deleted.append(Key)
        self.objects.pop(Key, None)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(session):
    def override_get_session():
        yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def fake_s3(monkeypatch):
    fake = FakeS3()
    monkeypatch.setattr(r2_client, "s3_client", fake)
    return fake


@pytest.fixture
def admin_user(session):
    user = AdminUser(email="admin@example.com", password=hash_password("s3cret-pass"))
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def admin_headers(admin_user):
    token = create_access_token(admin_user)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def catalog_data(session):
    """One category with two products, three sizes and two delivery states."""
    bars = Category(name="Bars", description="Chocolate bars")
    boxes = Category(name="Gift Boxes")
    session.add_all([bars, boxes])
    session.commit()

    dark = Product(name="Dark Bar", category_id=bars.id)
    milk = Product(name="Milk Bar", category_id=bars.id)
    hamper = Product(name="Hamper", category_id=boxes.id)
    session.add_all([dark, milk, hamper])
    session.commit()

    small = ProductSize(product_id=dark.id, size_name="Small", price=Decimal("15.00"))
    large = ProductSize(product_id=dark.id, size_name="Large", price=Decimal("25.00"))
    milk_std = ProductSize(product_id=milk.id, size_name="Standard", price=Decimal("20.00"))
    karnataka = DeliveryState(name="Karnataka", delivery_charge=Decimal("50.00"))
    goa = DeliveryState(name="Goa", delivery_charge=Decimal("0"))
    session.add_all([small, large, milk_std, karnataka, goa])
    session.commit()

    for row in (bars, boxes, dark, milk, hamper, small, large, milk_std, karnataka, goa):
        session.refresh(row)

    return {
        "bars": bars,
        "boxes": boxes,
        "dark": dark,
        "milk": milk,
        "hamper": hamper,
        "small": small,
        "large": large,
        "milk_std": milk_std,
        "karnataka": karnataka,
        "goa": goa,
    }
