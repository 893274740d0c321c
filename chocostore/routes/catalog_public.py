from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from chocostore.database import get_session
from chocostore.models.gallery import GalleryItem
from chocostore.schemas.catalog_schemas import (
    CategoryRead,
    ProductDetail,
    ProductRead,
    ProductSizeRead,
    StateRead,
)
from chocostore.services import catalog

router = APIRouter()
gallery_router = APIRouter()


@router.get("/categories", response_model=List[CategoryRead])
def list_categories(session: Session = Depends(get_session)):
    return catalog.list_categories(session)


@router.get("/categories/{category_id}/products", response_model=List[ProductRead])
def list_category_products(category_id: int, session: Session = Depends(get_session)):
    if not catalog.get_category(session, category_id):
        raise HTTPException(404, "Category not found")
    return catalog.list_products(session, category_id)


@router.get("/products", response_model=List[ProductDetail])
def list_catalogue(session: Session = Depends(get_session)):
    """Every product with its sizes, for the public catalogue page."""
    return [
        ProductDetail(
            **ProductRead.model_validate(p).model_dump(),
            sizes=[ProductSizeRead.model_validate(s) for s in catalog.list_product_sizes(session, p.id)],
        )
        for p in catalog.list_all_products(session)
    ]


@router.get("/products/{product_id}/sizes", response_model=List[ProductSizeRead])
def list_product_sizes(product_id: int, session: Session = Depends(get_session)):
    if not catalog.get_product(session, product_id):
        raise HTTPException(404, "Product not found")
    return catalog.list_product_sizes(session, product_id)


@router.get("/states", response_model=List[StateRead])
def list_states(session: Session = Depends(get_session)):
    return catalog.list_states(session)


@gallery_router.get("")
def public_gallery(session: Session = Depends(get_session)):
    return session.exec(
        select(GalleryItem)
        .where(GalleryItem.is_active == True)  # noqa: E712
        .order_by(GalleryItem.created_at.desc())
    ).all()
