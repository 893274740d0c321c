# chocostore/services/catalog.py
"""
Read access to the catalogue tables.

Every function returns plain lists / rows and turns store failures into
RemoteFetchError so callers can show a notice and keep what they already
have loaded.
"""
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from chocostore.exceptions import RemoteFetchError
from chocostore.models.category import Category
from chocostore.models.delivery_state import DeliveryState
from chocostore.models.product import Product
from chocostore.models.product_size import ProductSize

logger = logging.getLogger(__name__)


def _fetch_all(session: Session, query, resource: str) -> list:
    try:
        return list(session.exec(query).all())
    except SQLAlchemyError as e:
        logger.error(f"Error fetching {resource}: {e}")
        raise RemoteFetchError(resource, str(e)) from e


def _fetch_one(session: Session, model, pk: int, resource: str):
    try:
        return session.get(model, pk)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching {resource} {pk}: {e}")
        raise RemoteFetchError(resource, str(e)) from e


def list_categories(session: Session) -> List[Category]:
    return _fetch_all(
        session,
        select(Category).order_by(Category.name),
        "categories",
    )


def list_products(session: Session, category_id: int) -> List[Product]:
    return _fetch_all(
        session,
        select(Product)
        .where(Product.category_id == category_id)
        .order_by(Product.name),
        "products",
    )


def list_all_products(session: Session) -> List[Product]:
    return _fetch_all(
        session,
        select(Product).order_by(Product.name),
        "products",
    )


def list_product_sizes(session: Session, product_id: int) -> List[ProductSize]:
    return _fetch_all(
        session,
        select(ProductSize)
        .where(ProductSize.product_id == product_id)
        .order_by(ProductSize.price, ProductSize.id),
        "product sizes",
    )


def list_states(session: Session) -> List[DeliveryState]:
    return _fetch_all(
        session,
        select(DeliveryState).order_by(DeliveryState.name),
        "states",
    )


def get_category(session: Session, category_id: int) -> Optional[Category]:
    return _fetch_one(session, Category, category_id, "category")


def get_product(session: Session, product_id: int) -> Optional[Product]:
    return _fetch_one(session, Product, product_id, "product")


def get_product_size(session: Session, size_id: int) -> Optional[ProductSize]:
    return _fetch_one(session, ProductSize, size_id, "product size")


def get_state(session: Session, state_id: Optional[int]) -> Optional[DeliveryState]:
    if state_id is None:
        return None
    return _fetch_one(session, DeliveryState, state_id, "state")
