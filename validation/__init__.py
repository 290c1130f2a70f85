"""Validation rules for the registration forms."""

from .field_rules import validate_field, is_empty, is_valid_email, is_valid_url
from .cross_field import (
    classify_length,
    length_feedback,
    counted_fields,
    selectable_options,
    exclusion_errors,
    dependent_keys,
)
from .evaluator import validate_form, validate_keys

__all__ = [
    "validate_field",
    "is_empty",
    "is_valid_email",
    "is_valid_url",
    "classify_length",
    "length_feedback",
    "counted_fields",
    "selectable_options",
    "exclusion_errors",
    "dependent_keys",
    "validate_form",
    "validate_keys",
]
