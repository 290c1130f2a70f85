"""Form state, role switching and attachment handling."""

from .attachment import AttachmentValidator, AttachmentResult, UploadedFile
from .store import FormStore
from .role_switch import RoleSwitchController

__all__ = [
    "AttachmentValidator",
    "AttachmentResult",
    "UploadedFile",
    "FormStore",
    "RoleSwitchController",
]
