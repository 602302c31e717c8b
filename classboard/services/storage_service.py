# /classboard-backend/classboard/services/storage_service.py

"""
Blob storage for photo bytes.

`BlobStore` is the two-operation contract the photo service depends on:
`put` writes bytes at a path and returns a retrievable URL, `delete` removes
them. `LocalBlobStore` writes under the uploads directory (served by the app
as static files); `R2BlobStore` talks to Cloudflare R2 through boto3's S3
client. Both raise `OSError` subclasses or botocore errors on failure and
leave the translation to domain errors to the caller.
"""

import io
import logging
import os
from functools import lru_cache
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from PIL import Image, UnidentifiedImageError

from ..core import config

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "image/jpeg"

# Exceptions a blob backend may raise for an I/O failure.
BLOB_ERRORS = (OSError, BotoCoreError, ClientError)


def photo_blob_path(board_id: str, photo_id: str) -> str:
    return f"boards/{board_id}/photos/{photo_id}.jpg"


def detect_content_type(data: bytes) -> str:
    """Sniffs the image format with Pillow; falls back to JPEG."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            mime = Image.MIME.get(img.format or "")
    except (UnidentifiedImageError, OSError):
        return DEFAULT_CONTENT_TYPE
    return mime or DEFAULT_CONTENT_TYPE


class BlobStore:
    def put(self, path: str, data: bytes, content_type: str = DEFAULT_CONTENT_TYPE) -> str:
        raise NotImplementedError

    def delete(self, path: str) -> None:
        raise NotImplementedError


class LocalBlobStore(BlobStore):
    def __init__(self, root_dir: str = config.UPLOADS_DIR, base_url: str = config.UPLOADS_BASE_URL):
        self.root_dir = root_dir
        self.base_url = base_url.rstrip("/")

    def _full_path(self, path: str) -> str:
        return os.path.join(self.root_dir, *path.split("/"))

    def put(self, path: str, data: bytes, content_type: str = DEFAULT_CONTENT_TYPE) -> str:
        full_path = self._full_path(path)
        os.makedirs(os.path.dirname(full_path), exist_ok=True)
        with open(full_path, "wb") as buffer:
            buffer.write(data)
        return f"{self.base_url}/{path}"

    def delete(self, path: str) -> None:
        try:
            os.remove(self._full_path(path))
        except FileNotFoundError:
            logger.info("Blob %s already absent; nothing to delete.", path)


class R2BlobStore(BlobStore):
    def __init__(
        self,
        bucket_name: Optional[str] = config.R2_BUCKET_NAME,
        account_id: Optional[str] = config.R2_ACCOUNT_ID,
        access_key: Optional[str] = config.R2_ACCESS_KEY_ID,
        secret_key: Optional[str] = config.R2_SECRET_ACCESS_KEY,
        public_domain: Optional[str] = config.R2_PUBLIC_DOMAIN,
        client=None,
    ):
        if not all([bucket_name, account_id, access_key, secret_key]) and client is None:
            raise ValueError("R2 storage requires R2_BUCKET_NAME, R2_ACCOUNT_ID, R2_ACCESS_KEY_ID and R2_SECRET_ACCESS_KEY.")
        self.bucket_name = bucket_name
        self.public_domain = public_domain
        self.s3_client = client or boto3.client(
            "s3",
            endpoint_url=f"https://{account_id}.r2.cloudflarestorage.com",
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            region_name="auto",
        )

    def put(self, path: str, data: bytes, content_type: str = DEFAULT_CONTENT_TYPE) -> str:
        self.s3_client.put_object(
            Bucket=self.bucket_name,
            Key=path,
            Body=data,
            ContentType=content_type,
        )
        if self.public_domain:
            return f"{self.public_domain.rstrip('/')}/{path}"
        return path

    def delete(self, path: str) -> None:
        # S3 delete_object succeeds for keys that do not exist.
        self.s3_client.delete_object(Bucket=self.bucket_name, Key=path)


@lru_cache(maxsize=1)
def get_blob_store() -> BlobStore:
    """
    FastAPI dependency selecting the backend named by BLOB_BACKEND. The store
    (and its boto3 client) is built once per process.
    """
    if config.BLOB_BACKEND == "r2":
        return R2BlobStore()
    return LocalBlobStore()
