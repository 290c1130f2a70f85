"""Form state contracts: attachments, validation results and submission snapshots."""

from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator
from typing import Any, Dict, Optional
from enum import Enum
from datetime import datetime

from .field_contracts import Role


class FileMeta(BaseModel):
    """Metadata of an accepted upload. The file handle stays with the caller."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    size_bytes: int = Field(..., ge=0)
    mime_or_extension: str = Field(..., description="Normalised extension, e.g. 'pdf'")

    @property
    def size_kb(self) -> str:
        """Size as shown next to the file name, e.g. '12.50 KB'."""
        return f"{self.size_bytes / 1024:.2f} KB"


class ValidationResult(BaseModel):
    """Errors keyed by field plus the overall verdict. Always derived, never stored."""
    errors: Dict[str, str] = Field(default_factory=dict)
    is_valid: bool = True

    @model_validator(mode='after')
    def validate_verdict(self) -> 'ValidationResult':
        """is_valid always mirrors the absence of errors."""
        object.__setattr__(self, 'is_valid', not self.errors)
        return self

    def error_for(self, key: str) -> Optional[str]:
        return self.errors.get(key)


class LengthClass(str, Enum):
    """Three-way classification of a counted text field."""
    TOO_SHORT = "too_short"
    OK = "ok"
    TOO_LONG = "too_long"


class LengthFeedback(BaseModel):
    """Live character count of a counted field."""
    length: int = Field(..., ge=0)
    min_length: int = Field(..., ge=0)
    max_length: int = Field(..., ge=1)
    classification: LengthClass

    @property
    def counter_text(self) -> str:
        """Running counter, e.g. '137/1000'."""
        return f"{self.length}/{self.max_length}"

    @property
    def is_ok(self) -> bool:
        return self.classification == LengthClass.OK


class SubmissionStatus(str, Enum):
    """Lifecycle state of a submission."""
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


class SubmissionSnapshot(BaseModel):
    """Immutable copy of the form taken when submission starts.

    Multi-enum selections are stored as tuples so the dispatched
    snapshot cannot change when the live form is edited afterwards.
    """
    model_config = ConfigDict(frozen=True)

    role: Role
    values: Dict[str, Any]
    attachment: Optional[FileMeta] = None
    taken_at: datetime = Field(default_factory=datetime.now)

    @field_validator('values', mode='before')
    @classmethod
    def freeze_values(cls, v: Any) -> Any:
        if not isinstance(v, dict):
            return v
        return {k: tuple(item) if isinstance(item, list) else item for k, item in v.items()}
