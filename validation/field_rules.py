"""Per-field validation rules.

Each check returns the error text for the first failing rule, or None
when the value satisfies its FieldDefinition.
"""

import re
from typing import Any, List, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

from contracts import FieldDefinition, FieldKind


_URL_ADAPTER = TypeAdapter(AnyHttpUrl)


def is_empty(value: Any) -> bool:
    """A value counts as missing when it is None, an empty string or an empty selection."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple, set)):
        return len(value) == 0
    return False


def is_valid_email(value: str) -> bool:
    """Bare address only; the 'Name <addr>' form is rejected."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_valid_url(value: str) -> bool:
    try:
        _URL_ADAPTER.validate_python(value)
    except ValidationError:
        return False
    return True


def parse_number(value: Any) -> Optional[float]:
    """Numeric value of a number field, or None if it does not parse."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _check_text(field: FieldDefinition, value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return field.message("type", f"{field.label} must be text")
    c = field.constraints
    if c.pattern is not None and not re.fullmatch(c.pattern, value):
        return field.message("pattern", "Invalid format")
    if c.min_length is not None and len(value) < c.min_length:
        return field.message("min_length", f"Must be at least {c.min_length} characters")
    if c.max_length is not None and len(value) > c.max_length:
        return field.message("max_length", f"Must not exceed {c.max_length} characters")
    return None


def _check_email(field: FieldDefinition, value: Any) -> Optional[str]:
    if not isinstance(value, str) or not is_valid_email(value):
        return field.message("email", "Invalid email address")
    return None


def _check_url(field: FieldDefinition, value: Any) -> Optional[str]:
    if not isinstance(value, str) or not is_valid_url(value):
        return field.message("url", "Must be a valid URL")
    domain = field.constraints.url_domain
    if domain and domain not in value:
        return field.message("url_domain", f"Must be a {domain} URL")
    return None


def _check_number(field: FieldDefinition, value: Any) -> Optional[str]:
    number = parse_number(value)
    if number is None:
        return field.message("number", "Must be a number")
    c = field.constraints
    if c.whole_number and not number.is_integer():
        return field.message("number", "Must be a whole number")
    if c.min_value is not None and number < c.min_value:
        return field.message("min_value", f"Must be at least {c.min_value:g}")
    return None


def _check_enum(field: FieldDefinition, value: Any) -> Optional[str]:
    allowed = field.constraints.allowed_values
    if allowed is not None and value not in allowed:
        return field.message("one_of", "Please select a valid option")
    return None


def _check_multi_enum(field: FieldDefinition, value: Any) -> Optional[str]:
    if not isinstance(value, (list, tuple)):
        return field.message("type", f"{field.label} must be a list of selections")
    min_items = field.constraints.min_items
    if min_items is None and field.required:
        min_items = 1
    if min_items is not None and len(value) < min_items:
        return field.message("min_items", f"Select at least {min_items}")
    allowed = field.constraints.allowed_values
    if allowed is not None and any(item not in allowed for item in value):
        return field.message("one_of", "Unknown option selected")
    return None


def _check_boolean(field: FieldDefinition, value: Any) -> Optional[str]:
    if field.required and value is not True:
        return field.message("required", f"{field.label} is required")
    return None


_CHECKS = {
    FieldKind.TEXT: _check_text,
    FieldKind.EMAIL: _check_email,
    FieldKind.URL: _check_url,
    FieldKind.NUMBER: _check_number,
    FieldKind.ENUM: _check_enum,
    FieldKind.MULTI_ENUM: _check_multi_enum,
    FieldKind.BOOLEAN: _check_boolean,
}


def validate_field(field: FieldDefinition, value: Any) -> Optional[str]:
    """Validate one value against its definition.

    Args:
        field: Definition of the field
        value: Current value held by the form

    Returns:
        Error message, or None if the value is acceptable
    """
    if field.kind in (FieldKind.MULTI_ENUM, FieldKind.BOOLEAN):
        if not field.required and is_empty(value):
            return None
        return _CHECKS[field.kind](field, value)

    if is_empty(value):
        if field.required:
            return field.message("required", f"{field.label} is required")
        return None
    return _CHECKS[field.kind](field, value)


def selected_values(value: Any) -> List[Any]:
    """Multi-enum value as a list, tolerating None."""
    if value is None:
        return []
    return list(value)
