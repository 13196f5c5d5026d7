"""
Storage Factory
===============

Creates the configured object storage backend.
"""

import logging

from .interface import StorageInterface
from .s3_adapter import S3StorageAdapter

logger = logging.getLogger(__name__)


class StorageFactory:
    @staticmethod
    def create() -> StorageInterface:
        logger.info("Creating S3/MinIO storage backend")
        return S3StorageAdapter()
