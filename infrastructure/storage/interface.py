"""
Storage Interface
=================

Contract for object storage used by listing images and avatars.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO, Optional


@dataclass
class StorageFile:
    """
    A stored object.

    Attributes:
        key: Object key inside the bucket (e.g. products/<user_id>/<name>.jpg)
        url: Public URL clients can render
        size: Size in bytes
        content_type: MIME type
        bucket: Bucket name
    """

    key: str
    url: str
    size: int
    content_type: str
    bucket: Optional[str] = None


class StorageInterface(ABC):
    """Abstract object storage. Implemented by S3StorageAdapter."""

    @abstractmethod
    def upload(self, file: BinaryIO, path: str, content_type: str) -> StorageFile:
        """
        Store a file at path.

        Raises:
            StorageException: If the upload fails
        """

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete an object. Returns False when it did not exist."""

    @abstractmethod
    def get_url(self, key: str) -> str:
        """Public URL of an object."""

    @abstractmethod
    def exists(self, key: str) -> bool:
        pass


class StorageException(Exception):
    """Base exception for storage operations."""

    pass
