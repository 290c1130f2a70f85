"""Pydantic contracts for the applicant intake engine.

Schemas, form state views and submission snapshots are all typed through these contracts.
"""

from .field_contracts import (
    Role,
    parse_role,
    FieldKind,
    FieldConstraints,
    FieldOption,
    FieldDefinition,
    CrossFieldKind,
    CrossFieldRule,
    RoleSchema,
)

from .form_contracts import (
    FileMeta,
    ValidationResult,
    LengthClass,
    LengthFeedback,
    SubmissionStatus,
    SubmissionSnapshot,
)

from .errors import (
    IntakeError,
    InvalidRoleError,
    UnknownFieldError,
    AttachmentError,
    TooLargeError,
    UnsupportedTypeError,
    SinkError,
)

__all__ = [
    # Fields and schemas
    "Role",
    "parse_role",
    "FieldKind",
    "FieldConstraints",
    "FieldOption",
    "FieldDefinition",
    "CrossFieldKind",
    "CrossFieldRule",
    "RoleSchema",
    # Form state
    "FileMeta",
    "ValidationResult",
    "LengthClass",
    "LengthFeedback",
    "SubmissionStatus",
    "SubmissionSnapshot",
    # Errors
    "IntakeError",
    "InvalidRoleError",
    "UnknownFieldError",
    "AttachmentError",
    "TooLargeError",
    "UnsupportedTypeError",
    "SinkError",
]
