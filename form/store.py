"""Form State Store - values, touched flags, attachment and cached errors.

The store owns mutation only. Validation itself lives in the pure
functions of the validation package; the store just asks them which
errors apply after each change.
"""

import copy
import logging
from typing import Any, Dict, List, Optional, Set

from contracts import (
    FieldKind,
    FieldOption,
    FileMeta,
    LengthFeedback,
    Role,
    RoleSchema,
    SubmissionSnapshot,
    UnknownFieldError,
    ValidationResult,
)
from registry import get_schema, default_values
from validation import (
    dependent_keys,
    length_feedback,
    selectable_options,
    validate_form,
    validate_keys,
)
from form.attachment import AttachmentResult, AttachmentValidator, UploadedFile


logger = logging.getLogger(__name__)


class FormStore:
    """Holds the live state of one registration form instance.

    Invariant: the keys of `values` are exactly the keys of the active
    schema after every operation.
    """

    def __init__(
        self,
        role: Role = Role.EXPERT,
        attachment_validator: Optional[AttachmentValidator] = None,
    ):
        """Initialize the form with defaults for a role.

        Args:
            role: Initially active role
            attachment_validator: Validator for uploads (default: settings-driven)
        """
        self.attachment_validator = attachment_validator or AttachmentValidator()
        self.attachment: Optional[FileMeta] = None
        self._schema: RoleSchema = get_schema(role)
        self._values: Dict[str, Any] = default_values(self._schema)
        self._touched: Set[str] = set()
        self._errors: Dict[str, str] = {}

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def schema(self) -> RoleSchema:
        return self._schema

    @property
    def active_role(self) -> Role:
        return self._schema.role

    @property
    def values(self) -> Dict[str, Any]:
        """Copy of the current values; mutate through set_field_value."""
        return copy.deepcopy(self._values)

    @property
    def touched(self) -> Set[str]:
        return set(self._touched)

    @property
    def errors(self) -> Dict[str, str]:
        """Errors computed so far for changed or blurred fields."""
        return dict(self._errors)

    def get(self, key: str) -> Any:
        self._require_key(key)
        return copy.deepcopy(self._values[key])

    def visible_errors(self) -> Dict[str, str]:
        """Errors of touched fields only, i.e. what is shown next to inputs."""
        return {k: v for k, v in self._errors.items() if k in self._touched}

    def options_for(self, key: str) -> List[FieldOption]:
        """Options currently offered for an enum/multi-enum field."""
        self._require_key(key)
        return selectable_options(self._schema, self._values, key)

    def length_feedback(self, key: str) -> LengthFeedback:
        """Live counter for a text field, e.g. the professional summary."""
        self._require_key(key)
        return length_feedback(self._schema.field(key), self._values[key])

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def set_field_value(self, key: str, value: Any) -> None:
        """Replace a field value, mark it touched and revalidate affected keys.

        Raises:
            UnknownFieldError: if the key is not in the active schema
        """
        self._require_key(key)
        if isinstance(value, (list, tuple, set)):
            value = list(value)
        self._values[key] = value
        self._touched.add(key)
        logger.debug("set %s.%s", self.active_role.value, key)
        self._revalidate(dependent_keys(self._schema, key))

    def toggle_option(self, key: str, option: str) -> None:
        """Checkbox semantics for multi-enum fields: add the option or remove it."""
        self._require_key(key)
        if self._schema.field(key).kind != FieldKind.MULTI_ENUM:
            raise ValueError(f"Field {key!r} is not a multi-select field")
        selected = list(self._values[key])
        if option in selected:
            selected.remove(option)
        else:
            selected.append(option)
        self.set_field_value(key, selected)

    def mark_touched(self, key: str) -> None:
        """Blur handler: mark touched without changing the value."""
        self._require_key(key)
        self._touched.add(key)
        self._revalidate({key})

    def touch_all(self) -> None:
        """Mark every field of the active schema as touched."""
        self._touched = set(self._schema.keys())

    def set_attachment(self, upload: UploadedFile) -> AttachmentResult:
        """Validate and store an upload; a rejected upload leaves the prior one in place."""
        result = self.attachment_validator.validate(upload)
        if result.ok:
            self.attachment = result.meta
            logger.debug("attachment set: %s", upload.name)
        return result

    def clear_attachment(self) -> None:
        self.attachment = None

    def validate_all(self) -> ValidationResult:
        """Full validation of the active schema. Does not touch fields."""
        result = validate_form(self._values, self._schema)
        self._errors = dict(result.errors)
        return result

    def reset(self) -> None:
        """Defaults for the active schema; clears touched, errors and attachment."""
        self._values = default_values(self._schema)
        self._touched = set()
        self._errors = {}
        self.attachment = None
        logger.debug("form reset (%s)", self.active_role.value)

    def load_schema(self, schema: RoleSchema) -> None:
        """Swap the active schema. Values return to defaults; the attachment is kept."""
        self._schema = schema
        self._values = default_values(schema)
        self._touched = set()
        self._errors = {}

    def snapshot(self) -> SubmissionSnapshot:
        """Immutable copy of values and attachment for dispatch."""
        return SubmissionSnapshot(
            role=self.active_role,
            values=copy.deepcopy(self._values),
            attachment=self.attachment,
        )

    # ------------------------------------------------------------------

    def _require_key(self, key: str) -> None:
        if key not in self._values:
            raise UnknownFieldError(key, self.active_role.value)

    def _revalidate(self, keys: Set[str]) -> None:
        fresh = validate_keys(self._values, self._schema, keys)
        for key in keys:
            if key in fresh:
                self._errors[key] = fresh[key]
            else:
                self._errors.pop(key, None)
