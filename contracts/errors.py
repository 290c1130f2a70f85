"""Error taxonomy for the intake engine.

Field and cross-field problems are reported as data in a ValidationResult;
only programmer errors, attachment rejections and sink failures are exceptions.
"""

from typing import Optional


class IntakeError(Exception):
    """Base class for all intake engine errors."""


class InvalidRoleError(IntakeError, ValueError):
    """Raised when a role identifier is not one of the known roles."""

    def __init__(self, role: object):
        self.role = role
        super().__init__(f"Unknown role: {role!r}. Available: ['expert', 'company']")


class UnknownFieldError(IntakeError, KeyError):
    """Raised when a field key is not declared by the active schema."""

    def __init__(self, key: str, role: str):
        self.key = key
        self.role = role
        super().__init__(f"Field {key!r} is not part of the {role} schema")

    def __str__(self) -> str:
        return self.args[0]


class AttachmentError(IntakeError):
    """An upload was rejected. Prior attachment state is left untouched."""

    code = "attachment_error"

    def __init__(self, message: str, file_name: Optional[str] = None):
        self.message = message
        self.file_name = file_name
        super().__init__(message)


class TooLargeError(AttachmentError):
    """Upload exceeds the configured size ceiling."""

    code = "too_large"


class UnsupportedTypeError(AttachmentError):
    """Upload extension/MIME type is not accepted."""

    code = "unsupported_type"


class SinkError(IntakeError):
    """The submission sink failed to accept a snapshot."""
