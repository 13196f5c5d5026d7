"""
Storage Abstraction Layer
==========================

Object storage for uploaded images (S3/MinIO).
"""

from .factory import StorageFactory
from .interface import StorageException, StorageFile, StorageInterface
from .media import MediaUploadService
from .s3_adapter import S3StorageAdapter

__all__ = [
    "StorageInterface",
    "StorageFile",
    "StorageException",
    "S3StorageAdapter",
    "StorageFactory",
    "MediaUploadService",
]
