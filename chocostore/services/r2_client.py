# chocostore/services/r2_client.py
import logging

import boto3
from botocore.exceptions import ClientError

from chocostore.config import settings
from chocostore.exceptions import StorageError

logger = logging.getLogger(__name__)

R2_BUCKET_NAME = settings.r2_bucket_name
R2_PUBLIC_BASE = settings.r2_public_base.rstrip("/")

s3_client = boto3.client(
    "s3",
    endpoint_url=f"https://{settings.r2_account_id}.r2.cloudflarestorage.com",
    aws_access_key_id=settings.r2_access_key_id,
    aws_secret_access_key=settings.r2_secret_access_key,
    region_name="auto"
)


def upload_to_r2(file, key: str, content_type: str) -> str:
    try:
        s3_client.upload_fileobj(
            file,
            R2_BUCKET_NAME,
            key,
            ExtraArgs={"ContentType": content_type}
        )
    except ClientError as e:
        logger.error(f"Upload of {key} failed: {e}")
        raise StorageError(str(e), key=key) from e

    logger.info(f"Uploaded {key} to {R2_BUCKET_NAME}")
    return key


def delete_from_r2(key: str) -> None:
    if not key:
        return
    try:
        s3_client.delete_object(Bucket=R2_BUCKET_NAME, Key=key)
    except ClientError as e:
        # a stale object in the bucket does not block the row delete
        logger.warning(f"Could not delete {key} from {R2_BUCKET_NAME}: {e}")


def get_public_url(key: str) -> str:
    return f"{R2_PUBLIC_BASE}/{key}"
