import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlmodel import Session, select
from chocostore.database import get_session
from chocostore.dependencies.admin import require_admin
from chocostore.models.category import Category
from chocostore.models.order_item import OrderItem
from chocostore.models.product import Product
from chocostore.models.product_size import ProductSize
from chocostore.schemas.catalog_schemas import ProductDetail, ProductSizeRead
from chocostore.schemas.product_schemas import ProductSizeCreate, ProductSizeUpdate
from chocostore.services.r2_client import delete_from_r2
from chocostore.services.r2_helper import upload_product_image
from chocostore.utils.clock import utcnow
from chocostore.utils.pagination import paginate

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


def _product_detail(session: Session, product: Product) -> ProductDetail:
    sizes = session.exec(
        select(ProductSize)
        .where(ProductSize.product_id == product.id)
        .order_by(ProductSize.price, ProductSize.id)
    ).all()
    detail = ProductDetail.model_validate(product)
    detail.sizes = [ProductSizeRead.model_validate(s) for s in sizes]
    return detail


@router.get("")
def list_products(
    page: int = 1,
    limit: int = 10,
    category_id: Optional[int] = None,
    search: Optional[str] = None,
    session: Session = Depends(get_session),
):
    query = select(Product)

    if category_id:
        query = query.where(Product.category_id == category_id)

    if search:
        query = query.where(Product.name.ilike(f"%{search}%"))

    return paginate(
        session=session,
        query=query.order_by(Product.name, Product.id),
        page=page,
        limit=limit,
        transform=lambda p: _product_detail(session, p),
    )


@router.get("/{product_id}", response_model=ProductDetail)
def get_product(product_id: int, session: Session = Depends(get_session)):
    product = session.get(Product, product_id)
    if not product:
        raise HTTPException(404, "Product not found")
    return _product_detail(session, product)


@router.post("", status_code=201, response_model=ProductDetail)
def create_product(
    name: str = Form(...),
    category_id: int = Form(...),
    description: str = Form(None),
    image: UploadFile = File(None),
    session: Session = Depends(get_session),
):
    if not name.strip():
        raise HTTPException(400, "Product name is required")

    if not session.get(Category, category_id):
        raise HTTPException(400, "Invalid category_id")

    image_key, image_url = None, None
    if image:
        image_key, image_url = upload_product_image(image, name)

    product = Product(
        name=name.strip(),
        description=description,
        category_id=category_id,
        image_key=image_key,
        image_url=image_url,
    )

    session.add(product)
    session.commit()
    session.refresh(product)
    logger.info(f"Created product {product.id} ({product.name})")

    return _product_detail(session, product)


@router.put("/{product_id}", response_model=ProductDetail)
def update_product(
    product_id: int,
    name: str = Form(None),
    category_id: int = Form(None),
    description: str = Form(None),
    image: UploadFile = File(None),
    session: Session = Depends(get_session),
):
    product = session.get(Product, product_id)
    if not product:
        raise HTTPException(404, "Product not found")

    if name is not None:
        if not name.strip():
            raise HTTPException(400, "Product name is required")
        product.name = name.strip()

    if category_id is not None:
        if not session.get(Category, category_id):
            raise HTTPException(400, "Invalid category_id")
        product.category_id = category_id

    if description is not None:
        product.description = description

    if image:
        old_key = product.image_key
        product.image_key, product.image_url = upload_product_image(image, product.name)
        delete_from_r2(old_key)

    product.updated_at = utcnow()
    session.add(product)
    session.commit()
    session.refresh(product)

    return _product_detail(session, product)


@router.delete("/{product_id}")
def delete_product(product_id: int, session: Session = Depends(get_session)):
    product = session.get(Product, product_id)
    if not product:
        raise HTTPException(404, "Product not found")

    if session.exec(select(OrderItem).where(OrderItem.product_id == product_id)).first():
        raise HTTPException(400, "Product appears in existing orders")

    for size in session.exec(select(ProductSize).where(ProductSize.product_id == product_id)).all():
        session.delete(size)

    image_key = product.image_key
    session.delete(product)
    session.commit()

    delete_from_r2(image_key)
    logger.info(f"Deleted product {product_id}")

    return {"message": "Product deleted"}


# ---------------------------------------------------------
# SIZES
# ---------------------------------------------------------

@router.post("/{product_id}/sizes", status_code=201, response_model=ProductSizeRead)
def add_size(product_id: int, data: ProductSizeCreate, session: Session = Depends(get_session)):
    if not session.get(Product, product_id):
        raise HTTPException(404, "Product not found")

    size = ProductSize(product_id=product_id, size_name=data.size_name.strip(), price=data.price)

    session.add(size)
    session.commit()
    session.refresh(size)

    return size


@router.put("/sizes/{size_id}", response_model=ProductSizeRead)
def update_size(size_id: int, data: ProductSizeUpdate, session: Session = Depends(get_session)):
    size = session.get(ProductSize, size_id)
    if not size:
        raise HTTPException(404, "Size not found")

    if data.size_name is not None:
        size.size_name = data.size_name.strip()
    if data.price is not None:
        size.price = data.price

    session.add(size)
    session.commit()
    session.refresh(size)

    return size


@router.delete("/sizes/{size_id}")
def delete_size(size_id: int, session: Session = Depends(get_session)):
    size = session.get(ProductSize, size_id)
    if not size:
        raise HTTPException(404, "Size not found")

    session.delete(size)
    session.commit()

    return {"message": "Size deleted"}
