import io

import pytest
from botocore.exceptions import ClientError
from starlette.datastructures import Headers, UploadFile

from chocostore.config import settings
from chocostore.exceptions import StorageError, UploadValidationError
from chocostore.services import r2_client
from chocostore.services.r2_helper import upload_product_image, validate_image


def _upload(content=b"\x89PNG data", content_type="image/png", filename="a.png"):
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


class FailingS3:
    def upload_fileobj(self, *args, **kwargs):
        raise ClientError({"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject")

    def delete_object(self, **kwargs):
        raise ClientError({"Error": {"Code": "NoSuchKey", "Message": "gone"}}, "DeleteObject")


def test_validate_image_returns_extension():
    assert validate_image(_upload()) == "png"
    assert validate_image(_upload(content_type="image/jpeg")) == "jpg"


def test_validate_image_rejects_other_types():
    with pytest.raises(UploadValidationError):
        validate_image(_upload(content_type="text/plain"))


def test_validate_image_rejects_empty_file():
    with pytest.raises(UploadValidationError):
        validate_image(_upload(content=b""))


def test_validate_image_rejects_oversized_file(monkeypatch):
    monkeypatch.setattr(settings, "max_upload_bytes", 4)

    with pytest.raises(UploadValidationError) as exc:
        validate_image(_upload(content=b"12345"))

    assert exc.value.field == "image"


def test_upload_builds_slugged_key_and_public_url(fake_s3):
    key, url = upload_product_image(_upload(), "Dark & Stormy Bar")

    assert key.startswith("product-images/dark-stormy-bar_")
    assert key.endswith(".png")
    assert url == f"https://cdn.example.test/{key}"
    assert fake_s3.objects[key]["content_type"] == "image/png"


def test_client_error_becomes_storage_error(monkeypatch):
    monkeypatch.setattr(r2_client, "s3_client", FailingS3())

    with pytest.raises(StorageError) as exc:
        r2_client.upload_to_r2(io.BytesIO(b"x"), "gallery/x.png", "image/png")

    assert exc.value.key == "gallery/x.png"


def test_failed_delete_does_not_raise(monkeypatch):
    monkeypatch.setattr(r2_client, "s3_client", FailingS3())

    r2_client.delete_from_r2("gallery/x.png")
    r2_client.delete_from_r2(None)


def test_storage_failure_on_upload_route_is_502(client, admin_headers, catalog_data, monkeypatch):
    monkeypatch.setattr(r2_client, "s3_client", FailingS3())

    resp = client.post(
        "/admin/gallery",
        data={"title": "Hamper"},
        files={"image": ("h.png", b"\x89PNG", "image/png")},
        headers=admin_headers,
    )

    assert resp.status_code == 502
    assert resp.json()["code"] == "STORAGE_ERROR"
