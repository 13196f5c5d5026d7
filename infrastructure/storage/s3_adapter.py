"""
S3 Storage Adapter
==================

StorageInterface backed by S3 (or MinIO) through django-storages.
"""

import logging
from typing import BinaryIO

from botocore.exceptions import BotoCoreError, ClientError
from django.conf import settings
from storages.backends.s3boto3 import S3Boto3Storage

from .interface import StorageException, StorageFile, StorageInterface

logger = logging.getLogger(__name__)


class S3StorageAdapter(StorageInterface):
    """
    Configuration (in settings.py):
        AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY: credentials
        AWS_STORAGE_BUCKET_NAME: bucket for uploaded media
        AWS_S3_REGION_NAME: region
        AWS_S3_ENDPOINT_URL: custom endpoint (MinIO)
        AWS_S3_CUSTOM_DOMAIN: CDN domain for public URLs (optional)
    """

    def __init__(self):
        self.storage = S3Boto3Storage(default_acl="public-read", querystring_auth=False)
        self.bucket_name = getattr(settings, "AWS_STORAGE_BUCKET_NAME", "zade-media")

    def upload(self, file: BinaryIO, path: str, content_type: str) -> StorageFile:
        try:
            saved_path = self.storage.save(path, file)
            size = self.storage.size(saved_path)
            url = self.storage.url(saved_path)
        except (BotoCoreError, ClientError, OSError) as e:
            logger.error(f"Failed to upload file to S3: {path}. Error: {str(e)}")
            raise StorageException(f"S3 upload failed: {str(e)}") from e

        logger.info(f"Uploaded file to S3: {saved_path}")
        return StorageFile(key=saved_path, url=url, size=size, content_type=content_type, bucket=self.bucket_name)

    def delete(self, key: str) -> bool:
        try:
            if not self.storage.exists(key):
                logger.warning(f"File not found in S3, cannot delete: {key}")
                return False
            self.storage.delete(key)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to delete file from S3: {key}. Error: {str(e)}")
            raise StorageException(f"S3 deletion failed: {str(e)}") from e

        logger.info(f"Deleted file from S3: {key}")
        return True

    def get_url(self, key: str) -> str:
        return self.storage.url(key)

    def exists(self, key: str) -> bool:
        try:
            return self.storage.exists(key)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Error checking existence of S3 key: {key}. Error: {str(e)}")
            return False
