import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select
from chocostore.database import get_session
from chocostore.dependencies.admin import require_admin
from chocostore.models.category import Category
from chocostore.models.product import Product
from chocostore.schemas.category_schemas import CategoryCreate, CategoryUpdate, CategoryResponse
from chocostore.utils.clock import utcnow

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=list[CategoryResponse])
def list_categories(session: Session = Depends(get_session)):
    return session.exec(select(Category).order_by(Category.name)).all()


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(category_id: int, session: Session = Depends(get_session)):
    category = session.get(Category, category_id)
    if not category:
        raise HTTPException(404, "Category not found")
    return category


@router.post("", status_code=201, response_model=CategoryResponse)
def create_category(data: CategoryCreate, session: Session = Depends(get_session)):
    existing = session.exec(select(Category).where(Category.name == data.name)).first()
    if existing:
        raise HTTPException(400, "Category already exists")

    category = Category(name=data.name, description=data.description)

    session.add(category)
    session.commit()
    session.refresh(category)
    logger.info(f"Created category {category.id} ({category.name})")

    return category


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: int,
    data: CategoryUpdate,
    session: Session = Depends(get_session),
):
    category = session.get(Category, category_id)
    if not category:
        raise HTTPException(404, "Category not found")

    if data.name is not None:
        name = data.name.strip()
        if not name:
            raise HTTPException(400, "Category name is required")
        clash = session.exec(
            select(Category).where(Category.name == name, Category.id != category_id)
        ).first()
        if clash:
            raise HTTPException(400, "Category already exists")
        category.name = name

    if data.description is not None:
        category.description = data.description

    category.updated_at = utcnow()
    session.add(category)
    session.commit()
    session.refresh(category)

    return category


@router.delete("/{category_id}")
def delete_category(category_id: int, session: Session = Depends(get_session)):
    category = session.get(Category, category_id)
    if not category:
        raise HTTPException(404, "Category not found")

    in_use = session.exec(select(Product).where(Product.category_id == category_id)).first()
    if in_use:
        raise HTTPException(400, "Category still has products")

    session.delete(category)
    session.commit()
    logger.info(f"Deleted category {category_id}")

    return {"message": "Category deleted"}
