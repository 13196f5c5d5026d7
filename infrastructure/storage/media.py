import os
import uuid
from typing import List, Optional

from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

from .interface import StorageException, StorageInterface

ALLOWED_FOLDERS = ("products", "events", "avatars", "artistes")
ALLOWED_CONTENT_TYPES = ("image/jpeg", "image/png", "image/gif", "image/webp")
MAX_UPLOAD_BYTES = 5 * 1024 * 1024


class MediaUploadService(BaseService):
    """Validates user image uploads and stores them under <folder>/<user_id>/."""

    def __init__(self, storage: StorageInterface):
        super().__init__()
        self.storage = storage

    @staticmethod
    def build_path(folder: str, user_id, filename: str) -> str:
        ext = os.path.splitext(filename or "")[1].lower().lstrip(".") or "jpg"
        return f"{folder}/{user_id}/{uuid.uuid4().hex}.{ext}"

    def _validate(self, upload) -> Optional[str]:
        content_type = getattr(upload, "content_type", None)
        if content_type not in ALLOWED_CONTENT_TYPES:
            return f"Unsupported file type: {content_type}"
        if upload.size > MAX_UPLOAD_BYTES:
            return f"{upload.name} exceeds the 5 MB limit"
        return None

    @BaseService.log_performance
    def upload_images(self, user, folder: str, files: List) -> ServiceResult:
        """Upload every file or none; returns the list of public URLs."""
        if folder not in ALLOWED_FOLDERS:
            return service_err(ErrorCodes.INVALID_INPUT, f"folder must be one of {', '.join(ALLOWED_FOLDERS)}")
        if not files:
            return service_err(ErrorCodes.INVALID_INPUT, "No files provided")

        for upload in files:
            problem = self._validate(upload)
            if problem:
                return service_err(ErrorCodes.VALIDATION_ERROR, problem)

        stored = []
        try:
            for upload in files:
                path = self.build_path(folder, user.id, upload.name)
                stored.append(self.storage.upload(upload, path, upload.content_type))
        except StorageException as e:
            self.logger.error(f"Upload batch failed for user {user.id}: {e}", exc_info=True)
            for item in stored:
                try:
                    self.storage.delete(item.key)
                except StorageException as cleanup_error:
                    self.logger.warning(f"Could not roll back {item.key}: {cleanup_error}")
            return service_err(ErrorCodes.INTERNAL_ERROR, "Failed to upload images")

        return service_ok([item.url for item in stored])
