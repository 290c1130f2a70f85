"""Attachment validator for the optional CV/brochure upload.

Checks run in order and the first failure wins:
1. size above the configured ceiling -> TooLargeError
2. extension/MIME not accepted      -> UnsupportedTypeError
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from contracts import AttachmentError, FileMeta, TooLargeError, UnsupportedTypeError
from config import settings


logger = logging.getLogger(__name__)


MIME_EXTENSIONS: Dict[str, str] = {
    "application/pdf": "pdf",
    "application/msword": "doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
}


@dataclass
class UploadedFile:
    """A file chosen by the user, as handed over by the rendering layer."""
    name: str
    size_bytes: int
    content_type: Optional[str] = None

    @classmethod
    def from_path(cls, path: Path) -> "UploadedFile":
        """Describe a file on disk (used by the CLI)."""
        path = Path(path)
        return cls(name=path.name, size_bytes=path.stat().st_size)

    @property
    def extension(self) -> str:
        return Path(self.name).suffix.lower().lstrip(".")


@dataclass
class AttachmentResult:
    """Either the accepted metadata or the rejection."""
    meta: Optional[FileMeta] = None
    error: Optional[AttachmentError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class AttachmentValidator:
    """Validates uploads against size and type limits."""

    def __init__(
        self,
        max_bytes: Optional[int] = None,
        allowed_extensions: Optional[List[str]] = None,
    ):
        """Initialize the validator.

        Args:
            max_bytes: Size ceiling, inclusive (default: settings.max_attachment_bytes)
            allowed_extensions: Accepted extensions without dot (default: settings)
        """
        self.max_bytes = settings.max_attachment_bytes if max_bytes is None else max_bytes
        self.allowed_extensions = [
            e.lower().lstrip(".")
            for e in (allowed_extensions or settings.allowed_attachment_extensions)
        ]

    def _resolve_type(self, upload: UploadedFile) -> Optional[str]:
        if upload.extension:
            return upload.extension if upload.extension in self.allowed_extensions else None
        # MIME type is only consulted for names without an extension
        if upload.content_type:
            ext = MIME_EXTENSIONS.get(upload.content_type.split(";")[0].strip().lower())
            if ext in self.allowed_extensions:
                return ext
        return None

    def validate(self, upload: UploadedFile) -> AttachmentResult:
        """Validate an upload.

        Args:
            upload: The uploaded file description

        Returns:
            AttachmentResult holding a FileMeta snapshot or the AttachmentError
        """
        if upload.size_bytes > self.max_bytes:
            limit_mb = self.max_bytes / (1024 * 1024)
            error = TooLargeError(
                f"File size must be less than {limit_mb:g}MB",
                file_name=upload.name,
            )
            logger.warning("Rejected attachment %s: %d bytes", upload.name, upload.size_bytes)
            return AttachmentResult(error=error)

        file_type = self._resolve_type(upload)
        if file_type is None:
            accepted = ", ".join(e.upper() for e in self.allowed_extensions)
            error = UnsupportedTypeError(
                f"Unsupported file type. Accepted: {accepted}",
                file_name=upload.name,
            )
            logger.warning("Rejected attachment %s: unsupported type", upload.name)
            return AttachmentResult(error=error)

        meta = FileMeta(name=upload.name, size_bytes=upload.size_bytes, mime_or_extension=file_type)
        return AttachmentResult(meta=meta)
