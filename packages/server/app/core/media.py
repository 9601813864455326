"""
Object storage for uploaded media (S3).

The server never receives image bytes: clients upload straight to S3 through
a pre-signed PUT URL and the public object URL is stored on the owning row.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

import boto3
import structlog
from botocore.exceptions import ClientError

from huddle_shared.schemas.common import FileType

from app.core.config import get_settings

log = structlog.get_logger()


class MediaStorage:
    def __init__(
        self,
        region: str,
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
        presigned_url_expire_seconds: int = 600,
    ):
        self.region = region
        self.presigned_url_expire_seconds = presigned_url_expire_seconds
        self.s3_client = boto3.client(
            "s3",
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            region_name=region,
        )

    def generate_presigned_url(self, key: str, bucket: str, file_type: FileType) -> str:
        """Pre-signed PUT URL for uploading ``key`` with the file type's content type."""
        try:
            return self.s3_client.generate_presigned_url(
                "put_object",
                Params={
                    "Bucket": bucket,
                    "Key": key,
                    "ContentType": file_type.content_type,
                },
                ExpiresIn=self.presigned_url_expire_seconds,
            )
        except ClientError as exc:
            log.error("media.presign_failed", bucket=bucket, key=key, error=str(exc))
            raise

    def get_object_url(self, key: str, bucket: str) -> str:
        return f"https://{bucket}.s3.{self.region}.amazonaws.com/{key}"


@lru_cache
def get_media_storage() -> MediaStorage:
    """FastAPI dependency; overridden in tests."""
    settings = get_settings()
    return MediaStorage(
        region=settings.aws_region,
        access_key_id=settings.aws_access_key_id,
        secret_access_key=settings.aws_secret_access_key,
        presigned_url_expire_seconds=settings.presigned_url_expire_seconds,
    )
