import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlmodel import Session, select
from chocostore.database import get_session
from chocostore.dependencies.admin import require_admin
from chocostore.models.gallery import GalleryItem
from chocostore.services.r2_client import delete_from_r2
from chocostore.services.r2_helper import upload_gallery_image
from chocostore.utils.clock import utcnow

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("")
def list_gallery(session: Session = Depends(get_session)):
    return session.exec(select(GalleryItem).order_by(GalleryItem.created_at.desc())).all()


@router.post("", status_code=201)
def create_gallery_item(
    title: str = Form(...),
    description: str = Form(None),
    is_active: bool = Form(True),
    image: UploadFile = File(...),
    session: Session = Depends(get_session),
):
    if not title.strip():
        raise HTTPException(400, "Title is required")

    image_key, image_url = upload_gallery_image(image, title)

    item = GalleryItem(
        title=title.strip(),
        description=description,
        is_active=is_active,
        image_key=image_key,
        image_url=image_url,
    )

    session.add(item)
    session.commit()
    session.refresh(item)
    logger.info(f"Created gallery item {item.id}")

    return item


@router.put("/{item_id}")
def update_gallery_item(
    item_id: int,
    title: str = Form(None),
    description: str = Form(None),
    is_active: bool = Form(None),
    image: UploadFile = File(None),
    session: Session = Depends(get_session),
):
    item = session.get(GalleryItem, item_id)
    if not item:
        raise HTTPException(404, "Gallery item not found")

    if title is not None:
        if not title.strip():
            raise HTTPException(400, "Title is required")
        item.title = title.strip()
    if description is not None:
        item.description = description
    if is_active is not None:
        item.is_active = is_active

    if image:
        old_key = item.image_key
        item.image_key, item.image_url = upload_gallery_image(image, item.title)
        delete_from_r2(old_key)

    item.updated_at = utcnow()
    session.add(item)
    session.commit()
    session.refresh(item)

    return item


@router.delete("/{item_id}")
def delete_gallery_item(item_id: int, session: Session = Depends(get_session)):
    item = session.get(GalleryItem, item_id)
    if not item:
        raise HTTPException(404, "Gallery item not found")

    image_key = item.image_key
    session.delete(item)
    session.commit()

    delete_from_r2(image_key)
    logger.info(f"Deleted gallery item {item_id}")

    return {"message": "Gallery item deleted"}
