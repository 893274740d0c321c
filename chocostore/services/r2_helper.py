# chocostore/services/r2_helper.py
import time
from typing import Optional, Tuple

from fastapi import UploadFile
from slugify import slugify

from chocostore.config import settings
from chocostore.exceptions import UploadValidationError
from chocostore.services.r2_client import get_public_url, upload_to_r2

ALLOWED_IMAGE_TYPES = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}


def _file_size(file: UploadFile) -> int:
    if file.size is not None:
        return file.size
    file.file.seek(0, 2)
    size = file.file.tell()
    file.file.seek(0)
    return size


def validate_image(file: UploadFile) -> str:
    """Return the extension to store the image under, or raise."""
    ext = ALLOWED_IMAGE_TYPES.get(file.content_type)
    if ext is None:
        raise UploadValidationError(
            f"Unsupported file type '{file.content_type}'. Use JPG, PNG, WEBP or GIF.",
            field="image",
        )

    size = _file_size(file)
    if size == 0:
        raise UploadValidationError("Uploaded file is empty", field="image")
    if size > settings.max_upload_bytes:
        limit_mb = settings.max_upload_bytes // (1024 * 1024)
        raise UploadValidationError(f"Image must be {limit_mb} MB or smaller", field="image")

    return ext


def _upload_image(file: UploadFile, folder: str, label: str) -> Tuple[str, str]:
    ext = validate_image(file)
    filename = f"{slugify(label) or 'image'}_{int(time.time())}.{ext}"
    key = f"{folder}/{filename}"

    upload_to_r2(file.file, key, file.content_type)
    return key, get_public_url(key)


def upload_product_image(file: UploadFile, product_name: str) -> Tuple[str, str]:
    return _upload_image(file, "product-images", product_name)


def upload_gallery_image(file: UploadFile, title: str) -> Tuple[str, str]:
    return _upload_image(file, "gallery", title)


def upload_order_image(file: UploadFile, customer_name: Optional[str] = None) -> Tuple[str, str]:
    return _upload_image(file, "orderimages", customer_name or "order")
